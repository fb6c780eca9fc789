"""
3D turtle interpreter.

Walks a sentence once, left to right, and records a Skeleton. The turtle
starts at the origin with identity orientation, facing +Y. Its local axes
are the reference axes rotated by the current orientation:

    forward = rotate(+Y)     right = rotate(+X)     up = rotate(+Z)

Rotations are composed on the right, ``orientation = orientation * delta``,
where delta turns by the symbol's angle (degrees, default 30) about the
turtle's current local axis. ``[`` saves a full copy of the state and
deepens the branch level; ``]`` restores the last copy.
"""

from dataclasses import dataclass
import math

import numpy as np

from treegen.config import TurtleConfig
from treegen.skeleton import LeafPoint, Skeleton, SkeletonNode, SkeletonSegment
from treegen.symbols import (
    FORWARD,
    LEAF,
    PITCH_DOWN,
    PITCH_UP,
    POP,
    PUSH,
    ROLL_LEFT,
    ROLL_RIGHT,
    YAW_LEFT,
    YAW_RIGHT,
    Symbol,
)
from treegen.vecmath import (
    X_AXIS,
    Y_AXIS,
    Z_AXIS,
    identity_quat,
    quat_from_axis_angle,
    quat_multiply,
    rotate_vector,
)

DEFAULT_LENGTH = 1.0
DEFAULT_ANGLE = 30.0
DEFAULT_LEAF_SIZE = 1.0

# Rotation symbol -> (reference axis in the turtle frame, direction)
ROTATION_AXES: dict[str, tuple[np.ndarray, float]] = {
    YAW_LEFT: (Z_AXIS, 1.0),
    YAW_RIGHT: (Z_AXIS, -1.0),
    PITCH_UP: (X_AXIS, 1.0),
    PITCH_DOWN: (X_AXIS, -1.0),
    ROLL_RIGHT: (Y_AXIS, 1.0),
    ROLL_LEFT: (Y_AXIS, -1.0),
}


@dataclass
class TurtleState:
    """Cursor state saved and restored by brackets."""
    position: np.ndarray
    orientation: np.ndarray
    radius: float
    depth: int
    current_node_id: int

    def copy(self) -> "TurtleState":
        return TurtleState(
            position=self.position.copy(),
            orientation=self.orientation.copy(),
            radius=self.radius,
            depth=self.depth,
            current_node_id=self.current_node_id,
        )

    def forward(self) -> np.ndarray:
        return rotate_vector(Y_AXIS, self.orientation)

    def right(self) -> np.ndarray:
        return rotate_vector(X_AXIS, self.orientation)

    def up(self) -> np.ndarray:
        return rotate_vector(Z_AXIS, self.orientation)


def radius_at_depth(config: TurtleConfig, depth: int) -> float:
    """Branch radius for a bracket level: base_radius * radius_falloff^depth."""
    return config.base_radius * math.pow(config.radius_falloff, depth)


def rotate_state(state: TurtleState, char: str, angle_degrees: float) -> None:
    """Turn the turtle in place for one rotation symbol."""
    reference, direction = ROTATION_AXES[char]
    axis = rotate_vector(reference, state.orientation)
    delta = quat_from_axis_angle(axis, math.radians(direction * angle_degrees))
    state.orientation = quat_multiply(state.orientation, delta)


def interpret_sentence(sentence: list[Symbol], config: TurtleConfig) -> Skeleton:
    """
    Run the turtle over `sentence` and return the resulting skeleton.

    Args:
        sentence: Symbols produced by the grammar
        config: Radius law for new nodes

    Returns:
        Skeleton with nodes (root first), segments, leaves and the
        terminal / branch-point flags filled in
    """
    skeleton = Skeleton()
    state = TurtleState(
        position=np.zeros(3),
        orientation=identity_quat(),
        radius=config.base_radius,
        depth=0,
        current_node_id=0,
    )
    skeleton.nodes.append(
        SkeletonNode(
            id=0,
            position=state.position.copy(),
            orientation=state.orientation.copy(),
            radius=state.radius,
            parent_id=None,
            depth=0,
        )
    )
    stack: list[TurtleState] = []

    for symbol in sentence:
        char = symbol.char

        if char == FORWARD:
            length = DEFAULT_LENGTH if symbol.length is None else symbol.length
            new_position = state.position + state.forward() * length
            new_radius = radius_at_depth(config, state.depth)

            parent = skeleton.node(state.current_node_id)
            node = SkeletonNode(
                id=len(skeleton.nodes),
                position=new_position.copy(),
                orientation=state.orientation.copy(),
                radius=new_radius,
                parent_id=parent.id,
                depth=state.depth,
            )
            skeleton.nodes.append(node)
            skeleton.segments.append(
                SkeletonSegment(
                    start_node_id=parent.id,
                    end_node_id=node.id,
                    start_radius=parent.radius,
                    end_radius=node.radius,
                    length=length,
                )
            )

            state.position = new_position
            state.radius = new_radius
            state.current_node_id = node.id

        elif char in ROTATION_AXES:
            angle = DEFAULT_ANGLE if symbol.angle is None else symbol.angle
            rotate_state(state, char, angle)

        elif char == PUSH:
            stack.append(state.copy())
            state.depth += 1

        elif char == POP:
            if stack:
                state = stack.pop()

        elif char == LEAF:
            size = DEFAULT_LEAF_SIZE if symbol.size is None else symbol.size
            skeleton.leaves.append(
                LeafPoint(
                    position=state.position.copy(),
                    orientation=state.orientation.copy(),
                    size=size,
                )
            )

        # Anything else (placeholders, unknown characters) leaves the turtle alone

    skeleton.annotate()
    return skeleton
