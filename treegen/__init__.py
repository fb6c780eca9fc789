"""
Treegen - procedural L-system trees

Generates 3D tree meshes from a seeded stochastic L-system. The same
configuration and seed always produce identical buffers.

Modules:
    rng: Seeded random stream (xmur3 + sfc32)
    symbols: Turtle command alphabet
    grammar: Stochastic rewriting (rules, selection, sentence generation)
    config: Configuration dataclasses
    presets: Named tree presets
    vecmath: Vector and quaternion primitives
    skeleton: Node / segment / leaf topology
    turtle: 3D turtle interpreter
    mesh: Flat geometry buffers
    uv: Bark UV mapping
    branches: Branch tube geometry
    leaves: Leaf shape and instance data
    pipeline: End-to-end generation
    schema: User-facing parameter schema
    visualization: Skeleton previews
"""

from treegen.branches import build_branch_geometry, connect_rings, generate_ring
from treegen.config import (
    BranchGeometryConfig,
    LeafInstanceConfig,
    LeafShapeConfig,
    LSystem,
    LSystemConfig,
    TreeConfig,
    TurtleConfig,
)
from treegen.grammar import (
    Generator,
    Literal,
    Rule,
    apply_rules,
    create_symbol,
    generate_sentence,
    select_rule,
)
from treegen.leaves import LeafInstanceData, build_leaf_instances, create_leaf_shape
from treegen.mesh import GeometryData
from treegen.pipeline import TreeResult, TreeStats, generate
from treegen.presets import TreePreset, all_presets, get_preset, preset_names
from treegen.rng import SeededRandom
from treegen.schema import TreeParams, TreeSummary, generate_from_params
from treegen.skeleton import LeafPoint, Skeleton, SkeletonNode, SkeletonSegment
from treegen.symbols import Symbol
from treegen.turtle import interpret_sentence
from treegen.visualization import plot_skeleton, render_tree_preview, save_skeleton_preview

__all__ = [
    # Randomness
    "SeededRandom",
    # Grammar
    "Symbol",
    "Rule",
    "Literal",
    "Generator",
    "select_rule",
    "create_symbol",
    "apply_rules",
    "generate_sentence",
    # Config
    "LSystem",
    "LSystemConfig",
    "TurtleConfig",
    "BranchGeometryConfig",
    "LeafShapeConfig",
    "LeafInstanceConfig",
    "TreeConfig",
    # Presets
    "TreePreset",
    "all_presets",
    "get_preset",
    "preset_names",
    # Skeleton
    "Skeleton",
    "SkeletonNode",
    "SkeletonSegment",
    "LeafPoint",
    "interpret_sentence",
    # Geometry
    "GeometryData",
    "LeafInstanceData",
    "generate_ring",
    "connect_rings",
    "build_branch_geometry",
    "create_leaf_shape",
    "build_leaf_instances",
    # Pipeline
    "TreeResult",
    "TreeStats",
    "generate",
    # Schema
    "TreeParams",
    "TreeSummary",
    "generate_from_params",
    # Previews
    "plot_skeleton",
    "render_tree_preview",
    "save_skeleton_preview",
]
