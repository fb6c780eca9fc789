"""
Vector and quaternion primitives.

Vectors are numpy arrays of shape [3]; quaternions are numpy arrays of shape
[4] stored as (x, y, z, w). Everything is float64 until the geometry layer
packs its output into float32 buffers.
"""

import math

import numpy as np

# Reference axes of the turtle frame (Y is up / forward)
X_AXIS = np.array([1.0, 0.0, 0.0])
Y_AXIS = np.array([0.0, 1.0, 0.0])
Z_AXIS = np.array([0.0, 0.0, 1.0])


# =============================================================================
# VECTORS
# =============================================================================

def vec3(x: float, y: float, z: float) -> np.ndarray:
    """Create a 3D vector."""
    return np.array([x, y, z], dtype=float)


def vec_length(v: np.ndarray) -> float:
    return math.sqrt(v[0] * v[0] + v[1] * v[1] + v[2] * v[2])


def vec_normalize(v: np.ndarray) -> np.ndarray:
    """Unit vector along v, or the zero vector when v has no length."""
    length = vec_length(v)
    if length == 0:
        return np.zeros(3)
    return v / length


def vec_cross(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    return np.array([
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    ])


def vec_distance(a: np.ndarray, b: np.ndarray) -> float:
    return vec_length(a - b)


def normalize_rows(vs: np.ndarray) -> np.ndarray:
    """Normalize each row of an [N, 3] array; zero rows stay zero."""
    lengths = np.sqrt(np.sum(vs * vs, axis=1, keepdims=True))
    safe = np.where(lengths == 0, 1.0, lengths)
    return np.where(lengths == 0, 0.0, vs / safe)


# =============================================================================
# QUATERNIONS
# =============================================================================

def identity_quat() -> np.ndarray:
    return np.array([0.0, 0.0, 0.0, 1.0])


def quat_multiply(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Hamilton product a * b (apply b first, then a)."""
    ax, ay, az, aw = a
    bx, by, bz, bw = b
    return np.array([
        aw * bx + ax * bw + ay * bz - az * by,
        aw * by - ax * bz + ay * bw + az * bx,
        aw * bz + ax * by - ay * bx + az * bw,
        aw * bw - ax * bx - ay * by - az * bz,
    ])


def quat_normalize(q: np.ndarray) -> np.ndarray:
    """Unit quaternion along q, or identity when q is zero."""
    length = math.sqrt(q[0] * q[0] + q[1] * q[1] + q[2] * q[2] + q[3] * q[3])
    if length == 0:
        return identity_quat()
    return q / length


def quat_from_axis_angle(axis: np.ndarray, angle: float) -> np.ndarray:
    """Rotation of `angle` radians about a unit `axis`."""
    half = angle / 2
    s = math.sin(half)
    return np.array([axis[0] * s, axis[1] * s, axis[2] * s, math.cos(half)])


def rotate_vector(v: np.ndarray, q: np.ndarray) -> np.ndarray:
    """
    Rotate v by unit quaternion q.

    Uses v' = v + 2w(u x v) + 2(u x (u x v)) with u the vector part of q.
    """
    u = q[:3]
    uv = vec_cross(u, v)
    uuv = vec_cross(u, uv)
    return v + uv * (2 * q[3]) + uuv * 2


def rotate_vectors(vs: np.ndarray, q: np.ndarray) -> np.ndarray:
    """Vectorised rotate_vector over the rows of an [N, 3] array."""
    u = np.broadcast_to(q[:3], vs.shape)
    uv = np.cross(u, vs)
    uuv = np.cross(u, uv)
    return vs + uv * (2 * q[3]) + uuv * 2


def quat_to_matrix(q: np.ndarray) -> np.ndarray:
    """3x3 rotation matrix (row-major) of a unit quaternion."""
    x, y, z, w = q
    xx, yy, zz = x * x, y * y, z * z
    xy, xz, yz = x * y, x * z, y * z
    wx, wy, wz = w * x, w * y, w * z
    return np.array([
        [1 - 2 * (yy + zz), 2 * (xy - wz), 2 * (xz + wy)],
        [2 * (xy + wz), 1 - 2 * (xx + zz), 2 * (yz - wx)],
        [2 * (xz - wy), 2 * (yz + wx), 1 - 2 * (xx + yy)],
    ])
