"""
Leaf geometry and instancing.

One leaf mesh is built once and drawn at every LeafPoint with its own
transform and colour.

Leaf shape: a strip of ``segments + 1`` rows, two vertices per row, running
from the base (y = 0) to the tip (y = length) and bowing backwards:

    t = row / segments
    y = t * length
    z = curvature * t^2 * length

The normal of a row is cross(+X, normalize(0, 1, 2 * curvature * t)).

Instances: per leaf, seven draws from a dedicated SeededRandom in a fixed
order (size, scatter x/y/z, colour r/g/b). Scatter rotations are composed
on the leaf's own orientation; colours are clamped to [0, 1]. Matrices are
packed column-major, 16 floats per instance.
"""

from typing import NamedTuple

import numpy as np

from treegen.config import LeafInstanceConfig, LeafShapeConfig
from treegen.mesh import GeometryData
from treegen.rng import SeededRandom
from treegen.skeleton import LeafPoint
from treegen.vecmath import (
    X_AXIS,
    Y_AXIS,
    Z_AXIS,
    quat_from_axis_angle,
    quat_multiply,
    quat_to_matrix,
    vec3,
    vec_cross,
    vec_normalize,
)


class LeafInstanceData(NamedTuple):
    """Packed per-instance buffers."""
    matrices: np.ndarray  # float32 [16 * count], column-major 4x4
    colors: np.ndarray  # float32 [3 * count]
    count: int

    @classmethod
    def empty(cls) -> "LeafInstanceData":
        return cls(
            matrices=np.zeros(0, dtype=np.float32),
            colors=np.zeros(0, dtype=np.float32),
            count=0,
        )

    def matrix(self, index: int) -> np.ndarray:
        """4x4 transform of one instance in conventional row/column layout."""
        return self.matrices[index * 16:(index + 1) * 16].reshape(4, 4).T


# =============================================================================
# LEAF SHAPE
# =============================================================================

def create_leaf_shape(config: LeafShapeConfig) -> GeometryData:
    """Build the shared leaf strip."""
    segments = config.segments
    rows = segments + 1
    half_width = config.width / 2

    positions = np.zeros((rows * 2, 3))
    normals = np.zeros((rows * 2, 3))
    uvs = np.zeros((rows * 2, 2))

    for row in range(rows):
        t = row / segments
        y = t * config.length
        z = config.curvature * t * t * config.length

        left, right = row * 2, row * 2 + 1
        positions[left] = (-half_width, y, z)
        positions[right] = (half_width, y, z)
        uvs[left] = (0.0, t)
        uvs[right] = (1.0, t)

        # Tangent along the leaf tilts with the bow's slope dz/dy = 2ct
        tangent_y = vec_normalize(vec3(0.0, 1.0, 2 * config.curvature * t))
        normal = vec_normalize(vec_cross(X_AXIS, tangent_y))
        normals[left] = normal
        normals[right] = normal

    indices = []
    for seg in range(segments):
        bottom_left, bottom_right = seg * 2, seg * 2 + 1
        top_left, top_right = (seg + 1) * 2, (seg + 1) * 2 + 1
        indices += [bottom_left, top_left, top_right]
        indices += [bottom_left, top_right, bottom_right]

    return GeometryData.from_arrays(positions, normals, uvs, np.array(indices))


# =============================================================================
# INSTANCES
# =============================================================================

def _signed(rng: SeededRandom, scale: float) -> float:
    """One draw mapped to [-scale, scale)."""
    return (rng.random() * 2 - 1) * scale


def compose_matrix(position: np.ndarray, orientation: np.ndarray, scale: float) -> np.ndarray:
    """Translation * rotation * uniform scale, returned column-major [16]."""
    m = np.eye(4)
    m[:3, :3] = quat_to_matrix(orientation) * scale
    m[:3, 3] = position
    return m.T.reshape(-1)


def build_leaf_instances(
    leaves: list[LeafPoint],
    config: LeafInstanceConfig,
    seed: str,
) -> LeafInstanceData:
    """
    Per-leaf transforms and colours.

    Args:
        leaves: Placement points from the skeleton
        config: Variation ranges and base colour
        seed: Seed of the leaf variation stream (independent of the grammar)

    Returns:
        LeafInstanceData; zero-length buffers when there are no leaves
    """
    if not leaves:
        return LeafInstanceData.empty()

    rng = SeededRandom(seed)
    count = len(leaves)
    matrices = np.zeros((count, 16))
    colors = np.zeros((count, 3))
    base = np.array(config.base_color)

    for i, leaf in enumerate(leaves):
        size_mult = 1 + _signed(rng, config.size_variation)
        scatter = [_signed(rng, config.rotation_scatter) for _ in range(3)]
        color_offset = np.array([_signed(rng, config.color_variation) for _ in range(3)])

        colors[i] = np.clip(base + color_offset, 0.0, 1.0)

        orientation = leaf.orientation
        if config.rotation_scatter > 0:
            qx = quat_from_axis_angle(X_AXIS, scatter[0])
            qy = quat_from_axis_angle(Y_AXIS, scatter[1])
            qz = quat_from_axis_angle(Z_AXIS, scatter[2])
            orientation = quat_multiply(orientation, quat_multiply(qx, quat_multiply(qy, qz)))

        matrices[i] = compose_matrix(leaf.position, orientation, leaf.size * size_mult)

    return LeafInstanceData(
        matrices=matrices.astype(np.float32).reshape(-1),
        colors=colors.astype(np.float32).reshape(-1),
        count=count,
    )
