"""
Configuration for tree generation.

All configuration is plain, frozen data. Each object checks its own values
on construction so an unusable combination (a two-vertex ring, a negative
length) fails before any geometry is produced.

    TreeConfig
      lsystem:        LSystem (axiom, rules, LSystemConfig)
      iterations:     rewriting generations
      seed:           string seed for grammar randomness
      turtle:         TurtleConfig
      branch:         BranchGeometryConfig
      leaf_shape:     LeafShapeConfig
      leaf_instance:  LeafInstanceConfig

Leaf variation draws from its own stream seeded with ``seed + "-leaves"``.
"""

from dataclasses import dataclass, field, replace
import math

from treegen.grammar import Literal, Rule, validate_rules

LEAF_SEED_SUFFIX = "-leaves"


def _check_finite(name: str, value: float) -> None:
    if not math.isfinite(value):
        raise ValueError(f"{name} must be finite, got {value}")


def _check_nonnegative(name: str, value: float) -> None:
    _check_finite(name, value)
    if value < 0:
        raise ValueError(f"{name} must be nonnegative, got {value}")


def _check_positive(name: str, value: float) -> None:
    _check_finite(name, value)
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")


@dataclass(frozen=True)
class LSystemConfig:
    """
    Parameters attached to symbols while rewriting.

    Length and radius shrink geometrically with bracket depth; variability
    scales a uniform jitter on lengths and angles (0 = no jitter).
    """

    base_length: float = 1.0  # Length of an F at depth 0
    base_radius: float = 0.1  # Trunk radius at depth 0
    length_falloff: float = 0.85  # Length multiplier per depth level
    radius_falloff: float = 0.7  # Radius multiplier per depth level
    branch_angle: float = 25.0  # Rotation angle in degrees
    variability: float = 0.1  # Jitter half-range as a fraction, in [0, 1]

    def __post_init__(self) -> None:
        _check_nonnegative("base_length", self.base_length)
        _check_nonnegative("base_radius", self.base_radius)
        _check_positive("length_falloff", self.length_falloff)
        _check_positive("radius_falloff", self.radius_falloff)
        _check_finite("branch_angle", self.branch_angle)
        _check_nonnegative("variability", self.variability)
        if self.variability > 1:
            raise ValueError(f"variability must be at most 1, got {self.variability}")


@dataclass(frozen=True)
class LSystem:
    """Axiom, production rules and symbol parameters of one L-system."""

    axiom: str
    rules: tuple[Rule, ...]
    config: LSystemConfig = field(default_factory=LSystemConfig)

    def __post_init__(self) -> None:
        # Accept any iterable of rules but store a tuple
        object.__setattr__(self, "rules", tuple(self.rules))
        validate_rules(self.rules)

    def with_config(self, config: LSystemConfig) -> "LSystem":
        return replace(self, config=config)


@dataclass(frozen=True)
class TurtleConfig:
    """Radius law used by the turtle: radius = base_radius * radius_falloff^depth."""

    base_radius: float = 0.1
    radius_falloff: float = 0.7

    def __post_init__(self) -> None:
        _check_nonnegative("base_radius", self.base_radius)
        _check_positive("radius_falloff", self.radius_falloff)

    @classmethod
    def from_lsystem(cls, config: LSystemConfig) -> "TurtleConfig":
        """Use the radius settings of an L-system config."""
        return cls(base_radius=config.base_radius, radius_falloff=config.radius_falloff)


@dataclass(frozen=True)
class BranchGeometryConfig:
    """Tube tessellation and bark texture tiling."""

    radial_segments: int = 8  # Vertices per ring
    texture_repeat_y: float = 2.0  # Texture tiles per world unit along branches

    def __post_init__(self) -> None:
        if self.radial_segments < 3:
            raise ValueError(
                f"radial_segments must be at least 3, got {self.radial_segments}"
            )
        _check_nonnegative("texture_repeat_y", self.texture_repeat_y)


@dataclass(frozen=True)
class LeafShapeConfig:
    """Shape of the single leaf mesh shared by all instances."""

    width: float = 0.15
    length: float = 0.25
    curvature: float = 0.1  # Backward bow (0 = flat)
    segments: int = 2  # Subdivisions along the leaf

    def __post_init__(self) -> None:
        _check_nonnegative("width", self.width)
        _check_nonnegative("length", self.length)
        _check_finite("curvature", self.curvature)
        if self.segments < 1:
            raise ValueError(f"leaf segments must be at least 1, got {self.segments}")


@dataclass(frozen=True)
class LeafInstanceConfig:
    """Per-instance variation applied to every placed leaf."""

    base_color: tuple[float, float, float] = (0.13, 0.55, 0.13)  # Forest green
    color_variation: float = 0.1  # Max offset per RGB channel
    size_variation: float = 0.2  # Scale jitter half-range
    rotation_scatter: float = 0.3  # Max rotation about each axis, radians

    def __post_init__(self) -> None:
        if len(self.base_color) != 3:
            raise ValueError("base_color must have three channels")
        object.__setattr__(self, "base_color", tuple(float(c) for c in self.base_color))
        for channel in self.base_color:
            if not 0.0 <= channel <= 1.0:
                raise ValueError(f"base_color channels must be in [0, 1], got {channel}")
        _check_nonnegative("color_variation", self.color_variation)
        _check_nonnegative("size_variation", self.size_variation)
        _check_nonnegative("rotation_scatter", self.rotation_scatter)


def default_lsystem() -> LSystem:
    """Two-rule branching tree: X -> F[+X][-X]FL, F -> FF."""
    return LSystem(
        axiom="X",
        rules=(
            Rule("X", 1.0, Literal("F[+X][-X]FL")),
            Rule("F", 1.0, Literal("FF")),
        ),
        config=LSystemConfig(
            base_length=0.5,
            base_radius=0.1,
            length_falloff=0.85,
            radius_falloff=0.7,
            branch_angle=25.0,
            variability=0.15,
        ),
    )


@dataclass(frozen=True)
class TreeConfig:
    """Everything needed to go from seed to mesh buffers."""

    lsystem: LSystem = field(default_factory=default_lsystem)
    iterations: int = 4
    seed: str = "default-tree"
    turtle: TurtleConfig = field(default_factory=TurtleConfig)
    branch: BranchGeometryConfig = field(default_factory=BranchGeometryConfig)
    leaf_shape: LeafShapeConfig = field(default_factory=LeafShapeConfig)
    leaf_instance: LeafInstanceConfig = field(default_factory=LeafInstanceConfig)

    def __post_init__(self) -> None:
        if self.iterations < 0:
            raise ValueError(f"iterations must be nonnegative, got {self.iterations}")

    @property
    def leaf_seed(self) -> str:
        """Seed of the leaf variation stream."""
        return self.seed + LEAF_SEED_SUFFIX

    @classmethod
    def default(cls) -> "TreeConfig":
        """Simple branching tree with leaves at the tips."""
        return cls()

    @classmethod
    def from_preset(
        cls,
        name: str,
        seed: str = "default-tree",
        iterations: int | None = None,
    ) -> "TreeConfig":
        """
        Build a config around a named preset.

        The turtle radii follow the preset's L-system config; iterations
        default to the preset's suggestion.

        Raises:
            KeyError: If no preset has this name.
        """
        from treegen.presets import get_preset, preset_names

        preset = get_preset(name)
        if preset is None:
            raise KeyError(f"Unknown preset {name!r}; choose from {preset_names()}")

        return cls(
            lsystem=preset.lsystem,
            iterations=preset.iterations if iterations is None else iterations,
            seed=seed,
            turtle=TurtleConfig.from_lsystem(preset.lsystem.config),
        )
