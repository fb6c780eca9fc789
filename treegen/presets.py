"""
Named tree presets.

Each preset pairs an L-system with a suggested iteration count. Presets share
a default LSystemConfig and override only what gives them their character
(angle, falloffs, variability).
"""

from dataclasses import dataclass, replace

from treegen.config import LSystem, LSystemConfig
from treegen.grammar import Literal, Rule

DEFAULT_CONFIG = LSystemConfig(
    base_length=1.0,
    base_radius=0.1,
    length_falloff=0.85,
    radius_falloff=0.7,
    branch_angle=25.0,
    variability=0.1,
)


@dataclass(frozen=True)
class TreePreset:
    """A named L-system with display text and a suggested iteration count."""
    name: str
    description: str
    lsystem: LSystem
    iterations: int


# =============================================================================
# PRESET DEFINITIONS
# =============================================================================

OAK = TreePreset(
    name="Oak",
    description="Broad, spreading branches like a deciduous oak",
    iterations=5,
    lsystem=LSystem(
        axiom="FX",
        rules=(
            # Wide four-way spread
            Rule("X", 0.5, Literal("F[+FX][-FX][^FX][&FX]L")),
            Rule("X", 0.3, Literal("F[++FX][--FX]FX")),
            Rule("X", 0.2, Literal("F[+FX]F[-FX]L")),
            Rule("F", 0.7, Literal("FF")),
            Rule("F", 0.3, Literal("F")),
        ),
        config=replace(DEFAULT_CONFIG, branch_angle=32.0, variability=0.15, length_falloff=0.8),
    ),
)

PINE = TreePreset(
    name="Pine",
    description="Tall conifer with upward-pointing branches",
    iterations=6,
    lsystem=LSystem(
        axiom="FX",
        rules=(
            Rule("X", 0.6, Literal("F[+^FX][-^FX]FX")),
            # Whorl of four short branches around the trunk
            Rule("X", 0.25, Literal("F[+^FL][-^FL][/+^FL][/-^FL]FX")),
            Rule("X", 0.15, Literal("FFX")),
            Rule("F", 0.8, Literal("FF")),
            Rule("F", 0.2, Literal("F")),
        ),
        config=replace(
            DEFAULT_CONFIG,
            branch_angle=22.0,
            variability=0.1,
            length_falloff=0.88,
            radius_falloff=0.75,
        ),
    ),
)

WILLOW = TreePreset(
    name="Willow",
    description="Graceful drooping branches that cascade downward",
    iterations=5,
    lsystem=LSystem(
        axiom="FX",
        rules=(
            Rule("X", 0.4, Literal("F[+&FX][-&FX][&FX]L")),
            Rule("X", 0.35, Literal("F&F[+&FL][-&FL]&FX")),
            Rule("X", 0.25, Literal("F^F[+&&FX][-&&FX]")),
            # Segments keep bending down as they grow
            Rule("F", 0.6, Literal("F&F")),
            Rule("F", 0.4, Literal("FF")),
        ),
        config=replace(
            DEFAULT_CONFIG,
            branch_angle=45.0,
            variability=0.2,
            length_falloff=0.82,
            radius_falloff=0.65,
        ),
    ),
)

BUSH = TreePreset(
    name="Bush",
    description="Dense, low-growing shrub with many branches",
    iterations=4,
    lsystem=LSystem(
        axiom="FX",
        rules=(
            Rule("X", 0.4, Literal("[+FX][-FX][^FX][&FX]L")),
            Rule("X", 0.3, Literal("F[++FX][--FX][+FX][-FX]L")),
            Rule("X", 0.3, Literal("[+&FX][-&FX]F[+FX][-FX]")),
            Rule("F", 0.5, Literal("F")),
            Rule("F", 0.3, Literal("FF")),
            # Empty production removes the segment
            Rule("F", 0.2, Literal("")),
        ),
        config=replace(
            DEFAULT_CONFIG,
            base_length=0.6,
            branch_angle=35.0,
            variability=0.25,
            length_falloff=0.7,
            radius_falloff=0.6,
        ),
    ),
)

SIMPLE = TreePreset(
    name="Simple",
    description="Basic test tree for debugging and learning",
    iterations=3,
    lsystem=LSystem(
        axiom="F",
        rules=(Rule("F", 1.0, Literal("F[+F]F[-F]F")),),
        config=replace(DEFAULT_CONFIG, branch_angle=25.7, variability=0.0, length_falloff=0.9),
    ),
)

PRESET_REGISTRY: tuple[TreePreset, ...] = (OAK, PINE, WILLOW, BUSH, SIMPLE)


# =============================================================================
# LOOKUP
# =============================================================================

def all_presets() -> list[TreePreset]:
    """All presets in registry order (a new list each call)."""
    return list(PRESET_REGISTRY)


def preset_names() -> list[str]:
    return [preset.name for preset in PRESET_REGISTRY]


def get_preset(name: str) -> TreePreset | None:
    """Case-insensitive lookup; None when the name is unknown."""
    lowered = name.lower()
    for preset in PRESET_REGISTRY:
        if preset.name.lower() == lowered:
            return preset
    return None
