"""
Flat mesh buffers.

GeometryData is the render-ready output of the geometry builders:

    positions  float32 [3 * V]   x, y, z per vertex
    normals    float32 [3 * V]   unit normal per vertex
    uvs        float32 [2 * V]   u, v per vertex
    indices    uint32  [3 * T]   vertex slots per triangle

An empty mesh has zero-length arrays, never None.
"""

from typing import NamedTuple

import numpy as np


class GeometryData(NamedTuple):
    positions: np.ndarray
    normals: np.ndarray
    uvs: np.ndarray
    indices: np.ndarray

    @classmethod
    def empty(cls) -> "GeometryData":
        return cls(
            positions=np.zeros(0, dtype=np.float32),
            normals=np.zeros(0, dtype=np.float32),
            uvs=np.zeros(0, dtype=np.float32),
            indices=np.zeros(0, dtype=np.uint32),
        )

    @classmethod
    def from_arrays(
        cls,
        positions: np.ndarray,
        normals: np.ndarray,
        uvs: np.ndarray,
        indices: np.ndarray,
    ) -> "GeometryData":
        """Flatten and cast arrays of any shape into packed buffers."""
        return cls(
            positions=np.ascontiguousarray(positions, dtype=np.float32).reshape(-1),
            normals=np.ascontiguousarray(normals, dtype=np.float32).reshape(-1),
            uvs=np.ascontiguousarray(uvs, dtype=np.float32).reshape(-1),
            indices=np.ascontiguousarray(indices, dtype=np.uint32).reshape(-1),
        )

    @property
    def vertex_count(self) -> int:
        return len(self.positions) // 3

    @property
    def triangle_count(self) -> int:
        return len(self.indices) // 3

    def is_valid(self) -> bool:
        """Check the buffer length relationships and index range."""
        if len(self.positions) % 3 != 0:
            return False
        if len(self.normals) != len(self.positions):
            return False
        if len(self.uvs) != self.vertex_count * 2:
            return False
        if len(self.indices) % 3 != 0:
            return False
        if len(self.indices) and int(self.indices.max()) >= self.vertex_count:
            return False
        return True
