"""
Branch tube geometry.

Every skeleton segment becomes an open tube: a ring of vertices at the start
node, a ring at the end node, and two triangles per quad between them.

Ring vertex i sits at angle 2*pi*i/n in the node's local XZ plane:

    p_i = center + rotate(radius * (cos a_i, 0, sin a_i), orientation)
    n_i = normalize(rotate((cos a_i, 0, sin a_i), orientation))

With identity orientation a branch points along +Y, so rings lie flat in XZ.
Quads are split as (r1[i], r2[i], r1[i+1]) and (r1[i+1], r2[i], r2[i+1]),
which keeps faces wound consistently around the tube.
"""

from typing import NamedTuple

import numpy as np

from treegen.config import BranchGeometryConfig
from treegen.mesh import GeometryData
from treegen.skeleton import Skeleton
from treegen.uv import branch_uv, v_offsets
from treegen.vecmath import normalize_rows, rotate_vectors


class RingData(NamedTuple):
    """Vertices of one ring, shape [segments, 3] each."""
    positions: np.ndarray
    normals: np.ndarray


def ring_directions(segments: int) -> np.ndarray:
    """Unit circle in the XZ plane, shape [segments, 3]."""
    angles = (np.arange(segments) * 2 * np.pi) / segments
    return np.stack([np.cos(angles), np.zeros(segments), np.sin(angles)], axis=1)


def generate_ring(
    center: np.ndarray,
    orientation: np.ndarray,
    radius: float,
    segments: int,
) -> RingData:
    """
    Place `segments` vertices on a circle of `radius` around `center`.

    Normals point from the center to each vertex; a zero radius gives zero
    normals rather than dividing by zero.
    """
    local = ring_directions(segments) * radius
    rotated = rotate_vectors(local, np.asarray(orientation, dtype=float))
    positions = rotated + np.asarray(center, dtype=float)
    normals = normalize_rows(rotated)
    return RingData(positions=positions, normals=normals)


def connect_rings(ring1_offset: int, ring2_offset: int, segments: int) -> np.ndarray:
    """
    Triangle indices stitching two rings into a closed tube.

    Returns:
        Flat int array of length 6 * segments
    """
    i = np.arange(segments)
    nxt = (i + 1) % segments
    r1, r2 = ring1_offset + i, ring2_offset + i
    r1_next, r2_next = ring1_offset + nxt, ring2_offset + nxt
    triangles = np.stack([r1, r2, r1_next, r1_next, r2, r2_next], axis=1)
    return triangles.reshape(-1)


def build_branch_geometry(skeleton: Skeleton, config: BranchGeometryConfig) -> GeometryData:
    """
    Build the bark mesh for every segment of `skeleton`.

    Each segment adds 2 * radial_segments vertices and 2 * radial_segments
    triangles. Segments are emitted in skeleton order, so vertex offsets and
    bark v offsets both follow segment creation order.
    """
    n = config.radial_segments
    if not skeleton.segments:
        return GeometryData.empty()

    scale = config.texture_repeat_y
    offsets = v_offsets([segment.length for segment in skeleton.segments], scale)

    positions, normals, uvs, indices = [], [], [], []
    vertex_offset = 0

    for segment, v_start in zip(skeleton.segments, offsets):
        start = skeleton.node(segment.start_node_id)
        end = skeleton.node(segment.end_node_id)

        start_ring = generate_ring(start.position, start.orientation, segment.start_radius, n)
        end_ring = generate_ring(end.position, end.orientation, segment.end_radius, n)

        positions += [start_ring.positions, end_ring.positions]
        normals += [start_ring.normals, end_ring.normals]

        for ring_index in range(2):
            uvs.append([
                branch_uv(ring_index, i, 2, n, segment.length, scale, v_start)
                for i in range(n)
            ])

        indices.append(connect_rings(vertex_offset, vertex_offset + n, n))
        vertex_offset += 2 * n

    return GeometryData.from_arrays(
        positions=np.concatenate(positions),
        normals=np.concatenate(normals),
        uvs=np.concatenate(uvs),
        indices=np.concatenate(indices),
    )
