"""
Tree skeleton: the topology between grammar and mesh.

The skeleton is an arena of nodes indexed by a dense integer id (node i is
``nodes[i]``), segments that reference node ids, and free-floating leaf
points:

    nodes:     SkeletonNode, id 0 is the root (parent_id None)
    segments:  (start_node_id -> end_node_id), radii and length cached
    leaves:    LeafPoint, never referenced by a segment

Invariants:
    - node ids equal their index and increase in creation order
    - a node's parent_id is None (root) or a smaller id
    - is_terminal / is_branch_point are derived from the final segment list
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import NamedTuple

import numpy as np


@dataclass
class SkeletonNode:
    """A point on the tree where the turtle drew to."""
    id: int
    position: np.ndarray  # [3]
    orientation: np.ndarray  # [4] quaternion (x, y, z, w)
    radius: float
    parent_id: int | None
    depth: int  # Bracket nesting level at creation
    is_terminal: bool = False
    is_branch_point: bool = False


class SkeletonSegment(NamedTuple):
    """Edge between two nodes, with radii and length fixed at creation."""
    start_node_id: int
    end_node_id: int
    start_radius: float
    end_radius: float
    length: float


class LeafPoint(NamedTuple):
    """Where a leaf goes. Not part of the node graph."""
    position: np.ndarray  # [3]
    orientation: np.ndarray  # [4]
    size: float


@dataclass
class Skeleton:
    """Complete tree topology."""
    nodes: list[SkeletonNode] = field(default_factory=list)
    segments: list[SkeletonSegment] = field(default_factory=list)
    leaves: list[LeafPoint] = field(default_factory=list)

    @property
    def num_nodes(self) -> int:
        return len(self.nodes)

    @property
    def max_depth(self) -> int:
        """Deepest bracket level of any node (0 for an unbranched stem)."""
        return max((node.depth for node in self.nodes), default=0)

    def node(self, node_id: int) -> SkeletonNode:
        """Look up a node by id (direct index into the arena)."""
        return self.nodes[node_id]

    def outgoing_counts(self) -> Counter:
        """Number of segments starting at each node id."""
        return Counter(segment.start_node_id for segment in self.segments)

    def annotate(self) -> None:
        """Set is_terminal / is_branch_point from the current segment list."""
        counts = self.outgoing_counts()
        for node in self.nodes:
            outgoing = counts.get(node.id, 0)
            node.is_terminal = outgoing == 0
            node.is_branch_point = outgoing > 1

    def branch_points(self) -> list[SkeletonNode]:
        return [node for node in self.nodes if node.is_branch_point]

    def terminals(self) -> list[SkeletonNode]:
        return [node for node in self.nodes if node.is_terminal]

    def total_length(self) -> float:
        """Sum of segment lengths."""
        return float(sum(segment.length for segment in self.segments))

    def positions(self) -> np.ndarray:
        """Node positions as an [N, 3] array."""
        if not self.nodes:
            return np.zeros((0, 3))
        return np.stack([node.position for node in self.nodes])

    def bounds(self) -> tuple[np.ndarray, np.ndarray]:
        """
        Axis-aligned bounds over nodes and leaves.

        Returns:
            (min_corner, max_corner), each shape [3]
        """
        points = [self.positions()]
        if self.leaves:
            points.append(np.stack([leaf.position for leaf in self.leaves]))
        stacked = np.concatenate(points, axis=0)
        if len(stacked) == 0:
            return np.zeros(3), np.zeros(3)
        return stacked.min(axis=0), stacked.max(axis=0)

    def validate(self) -> None:
        """
        Check the arena invariants.

        Raises:
            ValueError: On a non-dense id, a parent created later than its
                child, or a segment referencing a missing node.
        """
        for index, node in enumerate(self.nodes):
            if node.id != index:
                raise ValueError(f"Node at index {index} has id {node.id}")
            if index == 0 and node.parent_id is not None:
                raise ValueError("Root node must not have a parent")
            if index > 0 and (node.parent_id is None or not 0 <= node.parent_id < index):
                raise ValueError(f"Node {index} has invalid parent {node.parent_id}")

        for segment in self.segments:
            for node_id in (segment.start_node_id, segment.end_node_id):
                if not 0 <= node_id < len(self.nodes):
                    raise ValueError(f"Segment references missing node {node_id}")
