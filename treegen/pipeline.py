"""
Tree generation pipeline.

    config
      -> generate_sentence     (grammar, seeded by config.seed)
      -> interpret_sentence    (turtle -> skeleton)
      -> build_branch_geometry (bark tubes)
      -> create_leaf_shape + build_leaf_instances (seeded by config.leaf_seed)
      -> TreeResult

The stages run in sequence and each returns new data; nothing is shared
between calls, so the same config always yields identical buffers.
"""

from typing import NamedTuple

from treegen.branches import build_branch_geometry
from treegen.config import TreeConfig
from treegen.grammar import generate_sentence
from treegen.leaves import LeafInstanceData, build_leaf_instances, create_leaf_shape
from treegen.mesh import GeometryData
from treegen.skeleton import Skeleton
from treegen.symbols import Symbol
from treegen.turtle import interpret_sentence


class TreeStats(NamedTuple):
    """Informational counts for one generated tree."""
    triangle_count: int  # Branch triangles + leaf triangles over all instances
    segment_count: int
    leaf_count: int
    symbol_count: int  # Length of the expanded sentence

    def as_dict(self) -> dict[str, int]:
        return {
            "Triangles": self.triangle_count,
            "Segments": self.segment_count,
            "Leaves": self.leaf_count,
            "Symbols": self.symbol_count,
        }


class TreeResult(NamedTuple):
    """Mesh buffers, instance data and statistics of one tree."""
    branch_geometry: GeometryData
    leaf_geometry: GeometryData  # Empty when the tree has no leaves
    leaf_instances: LeafInstanceData
    stats: TreeStats
    skeleton: Skeleton
    sentence: list[Symbol]

    def get_scalar_summary(self) -> dict[str, int]:
        summary = self.stats.as_dict()
        summary["BranchVertices"] = self.branch_geometry.vertex_count
        summary["LeafVertices"] = self.leaf_geometry.vertex_count
        summary["Nodes"] = self.skeleton.num_nodes
        summary["BranchPoints"] = len(self.skeleton.branch_points())
        summary["MaxDepth"] = self.skeleton.max_depth
        return summary

    def print_summary(self) -> None:
        """Print a formatted summary table to stdout."""
        print("\n" + "=" * 40)
        print("TREE SUMMARY")
        print("=" * 40)
        for key, value in self.get_scalar_summary().items():
            print(f"{key:20s}: {value:>10d}")
        print("=" * 40)


def generate(config: TreeConfig) -> TreeResult:
    """
    Generate a complete tree from configuration.

    Args:
        config: Validated tree configuration

    Returns:
        TreeResult with bark mesh, leaf mesh, leaf instances and stats
    """
    sentence = generate_sentence(config.lsystem, config.iterations, config.seed)
    skeleton = interpret_sentence(sentence, config.turtle)

    branch_geometry = build_branch_geometry(skeleton, config.branch)

    if skeleton.leaves:
        leaf_geometry = create_leaf_shape(config.leaf_shape)
        leaf_instances = build_leaf_instances(
            skeleton.leaves, config.leaf_instance, config.leaf_seed
        )
    else:
        leaf_geometry = GeometryData.empty()
        leaf_instances = LeafInstanceData.empty()

    stats = TreeStats(
        triangle_count=(
            branch_geometry.triangle_count
            + leaf_geometry.triangle_count * leaf_instances.count
        ),
        segment_count=len(skeleton.segments),
        leaf_count=len(skeleton.leaves),
        symbol_count=len(sentence),
    )

    return TreeResult(
        branch_geometry=branch_geometry,
        leaf_geometry=leaf_geometry,
        leaf_instances=leaf_instances,
        stats=stats,
        skeleton=skeleton,
        sentence=sentence,
    )
