"""
User-facing parameter schema.

TreeParams is the flat set of knobs a UI or request exposes (preset, seed,
sliders, leaf colour). It validates its own ranges with pydantic and
converts into a full TreeConfig for the pipeline.
"""

from dataclasses import replace
import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

from treegen.config import (
    LeafInstanceConfig,
    LeafShapeConfig,
    TreeConfig,
    TurtleConfig,
    default_lsystem,
)
from treegen.pipeline import TreeResult, generate
from treegen.presets import get_preset

HEX_COLOR = re.compile(r"^#?[0-9a-fA-F]{6}$")


def hex_to_rgb(color: str) -> tuple[float, float, float]:
    """Parse '#RRGGBB' (leading # optional) into channels in [0, 1]."""
    if not HEX_COLOR.match(color):
        raise ValueError(f"Expected a #RRGGBB colour, got {color!r}")
    value = int(color.lstrip("#"), 16)
    return (
        ((value >> 16) & 255) / 255,
        ((value >> 8) & 255) / 255,
        (value & 255) / 255,
    )


class TreeParams(BaseModel):
    """Input schema for one tree request."""

    model_config = ConfigDict(frozen=True)

    preset: str = Field(default="Oak", description="Preset name (case-insensitive)")
    seed: str = Field(default="default-tree", description="Seed string for all randomness")
    iterations: int = Field(default=5, ge=0, le=8, description="Rewriting generations")
    branch_angle: float = Field(default=32.0, ge=0.0, le=180.0, description="Degrees")
    length_falloff: float = Field(
        default=0.8, gt=0.0, le=1.5, description="Length multiplier per branch level"
    )
    radius_falloff: float = Field(
        default=0.7, gt=0.0, le=1.5, description="Radius multiplier per branch level"
    )
    variability: float = Field(default=0.15, ge=0.0, le=1.0, description="Jitter fraction")
    base_length: float = Field(default=1.0, gt=0.0, description="Trunk segment length")
    base_radius: float = Field(default=0.1, gt=0.0, description="Trunk radius")
    leaf_size: float = Field(default=1.0, gt=0.0, description="Leaf shape scale")
    leaf_color: str = Field(default="#228B22", description="Leaf colour as #RRGGBB")

    @field_validator("leaf_color")
    @classmethod
    def check_color(cls, value: str) -> str:
        hex_to_rgb(value)
        return value

    @classmethod
    def from_preset(cls, name: str, seed: str = "default-tree") -> "TreeParams":
        """
        Parameters preloaded with a preset's suggested iterations and
        L-system settings. Unknown names give the defaults with that preset
        name recorded.
        """
        preset = get_preset(name)
        if preset is None:
            return cls(preset=name, seed=seed)
        cfg = preset.lsystem.config
        return cls(
            preset=preset.name,
            seed=seed,
            iterations=preset.iterations,
            branch_angle=cfg.branch_angle,
            length_falloff=cfg.length_falloff,
            radius_falloff=cfg.radius_falloff,
            variability=cfg.variability,
            base_length=cfg.base_length,
        )

    def to_config(self) -> TreeConfig:
        """
        Expand into a full TreeConfig.

        The preset supplies the axiom and rules (the default L-system when
        the name is unknown); every numeric slider overrides the preset's
        own value.
        """
        preset = get_preset(self.preset)
        lsystem = preset.lsystem if preset is not None else default_lsystem()
        lsystem_config = replace(
            lsystem.config,
            base_length=self.base_length,
            base_radius=self.base_radius,
            length_falloff=self.length_falloff,
            radius_falloff=self.radius_falloff,
            branch_angle=self.branch_angle,
            variability=self.variability,
        )
        leaf_shape = LeafShapeConfig()

        return TreeConfig(
            lsystem=lsystem.with_config(lsystem_config),
            iterations=self.iterations,
            seed=self.seed,
            turtle=TurtleConfig.from_lsystem(lsystem_config),
            leaf_shape=replace(
                leaf_shape,
                width=leaf_shape.width * self.leaf_size,
                length=leaf_shape.length * self.leaf_size,
            ),
            leaf_instance=LeafInstanceConfig(base_color=hex_to_rgb(self.leaf_color)),
        )


class TreeSummary(BaseModel):
    """Output schema: statistics of a generated tree."""

    triangle_count: int = Field(description="Branch plus instanced leaf triangles")
    segment_count: int = Field(description="Branch segments in the skeleton")
    leaf_count: int = Field(description="Leaf instances")
    symbol_count: int = Field(description="Symbols after full expansion")
    branch_vertex_count: int = Field(description="Vertices in the bark mesh")

    @classmethod
    def from_result(cls, result: TreeResult) -> "TreeSummary":
        return cls(
            **result.stats._asdict(),
            branch_vertex_count=result.branch_geometry.vertex_count,
        )


def generate_from_params(params: TreeParams) -> TreeResult:
    """Validate-then-generate entry point for external callers."""
    return generate(params.to_config())
