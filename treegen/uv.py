"""
Bark UV mapping.

u wraps around the branch circumference, v runs along it:

    u = vertex_index / radial_segments                         in [0, 1)
    v = v_offset + ring_progress * segment_length * texture_scale

v_offset of segment k is the summed ``length * texture_scale`` of segments
0..k-1, so the texture continues across segment boundaries.
"""

from collections.abc import Sequence


def branch_uv(
    ring_index: int,
    vertex_index: int,
    total_rings: int,
    radial_segments: int,
    segment_length: float,
    texture_scale: float,
    v_offset: float,
) -> tuple[float, float]:
    """UV of one ring vertex within a segment."""
    u = vertex_index / radial_segments
    progress = ring_index / (total_rings - 1) if total_rings > 1 else 0.0
    v = v_offset + progress * segment_length * texture_scale
    return u, v


def v_offsets(lengths: Sequence[float], texture_scale: float) -> list[float]:
    """Start v of every segment: the summed length * texture_scale before it."""
    offsets = []
    offset = 0.0
    for length in lengths:
        offsets.append(offset)
        offset += length * texture_scale
    return offsets
