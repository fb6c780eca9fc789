"""
Tests for the 3D turtle interpreter.

These tests verify that sentences produce the expected skeleton topology,
positions, radii and leaf placements.
"""

import numpy as np
import pytest

from treegen.config import TreeConfig, TurtleConfig
from treegen.grammar import generate_sentence
from treegen.symbols import Symbol
from treegen.turtle import TurtleState, interpret_sentence, radius_at_depth, rotate_state
from treegen.vecmath import identity_quat


def sentence_of(text: str, length: float = 1.0, angle: float = 90.0) -> list[Symbol]:
    """Build a sentence with fixed parameters from a string."""
    symbols = []
    for char in text:
        if char == "F":
            symbols.append(Symbol(char, length=length))
        elif char in "+-^&/\\":
            symbols.append(Symbol(char, angle=angle))
        elif char == "L":
            symbols.append(Symbol(char, size=1.0))
        else:
            symbols.append(Symbol(char))
    return symbols


class TestTopology:
    """Tests for node, segment and leaf structure."""

    def test_single_forward(self) -> None:
        """'F' should give a root, one node above it and one segment."""
        skeleton = interpret_sentence(sentence_of("F"), TurtleConfig())

        assert skeleton.num_nodes == 2
        assert len(skeleton.segments) == 1
        assert len(skeleton.leaves) == 0
        assert np.allclose(skeleton.nodes[1].position, [0.0, 1.0, 0.0])
        assert skeleton.segments[0].start_node_id == 0
        assert skeleton.segments[0].end_node_id == 1

    def test_empty_sentence(self) -> None:
        """An empty sentence still has the root node."""
        skeleton = interpret_sentence([], TurtleConfig())
        assert skeleton.num_nodes == 1
        assert skeleton.nodes[0].parent_id is None
        assert skeleton.nodes[0].is_terminal

    def test_branch_point(self) -> None:
        """F[+F][-F] should fork at node 1."""
        skeleton = interpret_sentence(sentence_of("F[+F][-F]"), TurtleConfig())

        assert skeleton.num_nodes == 4
        assert len(skeleton.segments) == 3
        assert skeleton.nodes[1].is_branch_point
        assert not skeleton.nodes[0].is_branch_point
        assert skeleton.nodes[2].is_terminal
        assert skeleton.nodes[3].is_terminal
        assert not skeleton.nodes[1].is_terminal

    def test_pop_restores_position(self) -> None:
        """After a branch the trunk continues from the saved node."""
        skeleton = interpret_sentence(sentence_of("F[+F]F"), TurtleConfig())

        trunk = skeleton.nodes[3]
        assert trunk.parent_id == 1
        assert np.allclose(trunk.position, [0.0, 2.0, 0.0])

    def test_pop_on_empty_stack_is_noop(self) -> None:
        skeleton = interpret_sentence(sentence_of("]]F"), TurtleConfig())
        assert skeleton.num_nodes == 2
        assert np.allclose(skeleton.nodes[1].position, [0.0, 1.0, 0.0])

    def test_unknown_symbols_ignored(self) -> None:
        plain = interpret_sentence(sentence_of("FF"), TurtleConfig())
        noisy = interpret_sentence(sentence_of("XFQFX"), TurtleConfig())

        assert noisy.num_nodes == plain.num_nodes
        assert np.allclose(noisy.positions(), plain.positions())

    def test_nodes_satisfy_arena_invariants(self) -> None:
        config = TreeConfig.from_preset("Oak", seed="arena", iterations=3)
        sentence = generate_sentence(config.lsystem, config.iterations, config.seed)
        skeleton = interpret_sentence(sentence, config.turtle)

        skeleton.validate()
        for index, node in enumerate(skeleton.nodes):
            assert node.id == index

    def test_segment_lengths_match_symbols(self) -> None:
        skeleton = interpret_sentence(sentence_of("FF", length=0.75), TurtleConfig())
        assert skeleton.total_length() == pytest.approx(1.5)
        assert np.allclose(skeleton.nodes[2].position, [0.0, 1.5, 0.0])


class TestRotation:
    """Tests for heading changes."""

    def test_yaw_left(self) -> None:
        """A 90 degree yaw left turns +Y toward -X."""
        skeleton = interpret_sentence(sentence_of("+F"), TurtleConfig())
        assert np.allclose(skeleton.nodes[1].position, [-1.0, 0.0, 0.0], atol=1e-9)

    def test_two_yaws_reverse_heading(self) -> None:
        """Two 90 degree yaws should point the turtle down."""
        skeleton = interpret_sentence(sentence_of("++F"), TurtleConfig())
        assert np.allclose(skeleton.nodes[1].position, [0.0, -1.0, 0.0], atol=1e-9)

    def test_yaw_left_then_right_cancels(self) -> None:
        skeleton = interpret_sentence(sentence_of("+-F"), TurtleConfig())
        assert np.allclose(skeleton.nodes[1].position, [0.0, 1.0, 0.0], atol=1e-9)

    def test_pitch_up(self) -> None:
        """A 90 degree pitch up turns +Y toward +Z."""
        skeleton = interpret_sentence(sentence_of("^F"), TurtleConfig())
        assert np.allclose(skeleton.nodes[1].position, [0.0, 0.0, 1.0], atol=1e-9)

    def test_roll_keeps_heading(self) -> None:
        skeleton = interpret_sentence(sentence_of("/F"), TurtleConfig())
        assert np.allclose(skeleton.nodes[1].position, [0.0, 1.0, 0.0], atol=1e-9)

    def test_default_angle(self) -> None:
        """A rotation symbol without an angle turns by 30 degrees."""
        skeleton = interpret_sentence([Symbol("+"), Symbol("F", length=1.0)], TurtleConfig())
        expected = [-np.sin(np.radians(30.0)), np.cos(np.radians(30.0)), 0.0]
        assert np.allclose(skeleton.nodes[1].position, expected)

    def test_local_axes_follow_orientation(self) -> None:
        """After a yaw left, forward and right turn while up stays +Z."""
        state = TurtleState(
            position=np.zeros(3),
            orientation=identity_quat(),
            radius=0.1,
            depth=0,
            current_node_id=0,
        )
        rotate_state(state, "+", 90.0)
        assert np.allclose(state.forward(), [-1.0, 0.0, 0.0], atol=1e-9)
        assert np.allclose(state.right(), [0.0, 1.0, 0.0], atol=1e-9)
        assert np.allclose(state.up(), [0.0, 0.0, 1.0], atol=1e-9)

    def test_orientation_stays_unit(self) -> None:
        state = TurtleState(
            position=np.zeros(3),
            orientation=identity_quat(),
            radius=0.1,
            depth=0,
            current_node_id=0,
        )
        for char in "+^/&-\\" * 20:
            rotate_state(state, char, 17.0)
        assert np.linalg.norm(state.orientation) == pytest.approx(1.0)
        assert np.linalg.norm(state.forward()) == pytest.approx(1.0)


class TestRadiusAndLeaves:
    """Tests for the radius law and leaf placement."""

    def test_radius_by_depth(self) -> None:
        """Radius = base_radius * radius_falloff^depth."""
        config = TurtleConfig(base_radius=0.2, radius_falloff=0.5)
        skeleton = interpret_sentence(sentence_of("F[F[F]]"), config)

        radii = [node.radius for node in skeleton.nodes]
        assert radii == pytest.approx([0.2, 0.2, 0.1, 0.05])
        assert [node.depth for node in skeleton.nodes] == [0, 0, 1, 2]
        assert radius_at_depth(config, 3) == pytest.approx(0.025)

    def test_segment_radii_from_nodes(self) -> None:
        config = TurtleConfig(base_radius=0.2, radius_falloff=0.5)
        skeleton = interpret_sentence(sentence_of("F[F]"), config)

        inner = skeleton.segments[1]
        assert inner.start_radius == pytest.approx(0.2)
        assert inner.end_radius == pytest.approx(0.1)

    def test_leaf_does_not_move_turtle(self) -> None:
        skeleton = interpret_sentence(sentence_of("FLF"), TurtleConfig())

        assert len(skeleton.leaves) == 1
        assert np.allclose(skeleton.leaves[0].position, [0.0, 1.0, 0.0])
        assert np.allclose(skeleton.nodes[2].position, [0.0, 2.0, 0.0])
        assert skeleton.leaves[0].size == 1.0

    def test_leaf_takes_turtle_orientation(self) -> None:
        skeleton = interpret_sentence(sentence_of("+L"), TurtleConfig())
        orientation = skeleton.leaves[0].orientation
        assert np.linalg.norm(orientation) == pytest.approx(1.0)
        assert not np.allclose(orientation, identity_quat())

    def test_leaf_default_size(self) -> None:
        skeleton = interpret_sentence([Symbol("L")], TurtleConfig())
        assert skeleton.leaves[0].size == 1.0
