"""
Tests for skeleton queries and invariants.
"""

import numpy as np
import pytest

from treegen.config import TurtleConfig
from treegen.skeleton import Skeleton, SkeletonNode, SkeletonSegment
from treegen.symbols import Symbol
from treegen.turtle import interpret_sentence
from treegen.vecmath import identity_quat


def fork() -> Skeleton:
    """F[+F][-F]L with unit lengths and 90 degree turns."""
    sentence = [
        Symbol("F", length=1.0),
        Symbol("["), Symbol("+", angle=90.0), Symbol("F", length=1.0), Symbol("]"),
        Symbol("["), Symbol("-", angle=90.0), Symbol("F", length=1.0), Symbol("]"),
        Symbol("L", size=1.0),
    ]
    return interpret_sentence(sentence, TurtleConfig())


def node(node_id: int, parent_id: int | None) -> SkeletonNode:
    return SkeletonNode(
        id=node_id,
        position=np.zeros(3),
        orientation=identity_quat(),
        radius=0.1,
        parent_id=parent_id,
        depth=0,
    )


class TestQueries:
    """Tests for derived skeleton information."""

    def test_branch_points_and_terminals(self) -> None:
        skeleton = fork()
        assert [n.id for n in skeleton.branch_points()] == [1]
        assert [n.id for n in skeleton.terminals()] == [2, 3]

    def test_outgoing_counts(self) -> None:
        counts = fork().outgoing_counts()
        assert counts[0] == 1
        assert counts[1] == 2
        assert counts[2] == 0

    def test_max_depth(self) -> None:
        assert fork().max_depth == 1
        assert Skeleton().max_depth == 0

    def test_total_length(self) -> None:
        assert fork().total_length() == pytest.approx(3.0)

    def test_bounds_include_leaves(self) -> None:
        low, high = fork().bounds()
        assert np.allclose(low, [-1.0, 0.0, 0.0], atol=1e-9)
        assert np.allclose(high, [1.0, 1.0, 0.0], atol=1e-9)

    def test_bounds_empty(self) -> None:
        low, high = Skeleton().bounds()
        assert np.allclose(low, 0.0)
        assert np.allclose(high, 0.0)

    def test_positions_shape(self) -> None:
        assert fork().positions().shape == (4, 3)
        assert Skeleton().positions().shape == (0, 3)


class TestValidate:
    """Tests for arena invariant checks."""

    def test_valid_skeleton(self) -> None:
        fork().validate()

    def test_non_dense_ids(self) -> None:
        skeleton = Skeleton(nodes=[node(0, None), node(5, 0)])
        with pytest.raises(ValueError, match="has id"):
            skeleton.validate()

    def test_parent_after_child(self) -> None:
        skeleton = Skeleton(nodes=[node(0, None), node(1, 2), node(2, 0)])
        with pytest.raises(ValueError, match="invalid parent"):
            skeleton.validate()

    def test_root_with_parent(self) -> None:
        skeleton = Skeleton(nodes=[node(0, 0)])
        with pytest.raises(ValueError, match="Root"):
            skeleton.validate()

    def test_dangling_segment(self) -> None:
        skeleton = Skeleton(
            nodes=[node(0, None)],
            segments=[SkeletonSegment(0, 3, 0.1, 0.1, 1.0)],
        )
        with pytest.raises(ValueError, match="missing node"):
            skeleton.validate()
