from __future__ import annotations

import numpy as np

from pathtracer.errors import ZeroVectorError

EPSILON: float = 1e-12 # smallest magnitude we still treat as a direction


def vector_length(v: np.ndarray) -> float:
    vector_array = np.asarray(v, dtype=float)
    return float(np.linalg.norm(vector_array))


def vector_length_squared(v: np.ndarray) -> float:
    vector_array = np.asarray(v, dtype=float)
    return float(np.dot(vector_array, vector_array))


def normalize_vector(v: np.ndarray) -> np.ndarray:
    """Returns a unit vector. Raises ZeroVectorError when v has no direction."""
    vector_array = np.asarray(v, dtype=float)
    magnitude = np.linalg.norm(vector_array)
    if not np.isfinite(magnitude) or magnitude < EPSILON:
        raise ZeroVectorError("Cannot normalize near-zero vector")
    return vector_array / magnitude


def vector_dot(a: np.ndarray, b: np.ndarray) -> float:
    vector_a = np.asarray(a, dtype=float)
    vector_b = np.asarray(b, dtype=float)
    return float(np.dot(vector_a, vector_b))


def vector_cross(a: np.ndarray, b: np.ndarray) -> np.ndarray: #cross product of two vectors (3D)
    vector_a = np.asarray(a, dtype=float)
    vector_b = np.asarray(b, dtype=float)
    return np.cross(vector_a, vector_b)


def x_direction() -> np.ndarray:
    return np.array([1.0, 0.0, 0.0])


def y_direction() -> np.ndarray:
    return np.array([0.0, 1.0, 0.0])


def z_direction() -> np.ndarray:
    return np.array([0.0, 0.0, 1.0])


def reflect_vector(I: np.ndarray, N: np.ndarray) -> np.ndarray:
    """Calculates the reflection vector R given the incident vector I and surface normal N.
       Assumes I points toward the surface"""
    vector_I = np.asarray(I, dtype=float)
    vector_N = np.asarray(N, dtype=float)
    return vector_I - 2.0 * vector_dot(vector_I, vector_N) * vector_N


def rotation_between(source: np.ndarray, target: np.ndarray) -> np.ndarray:
    """3x3 rotation matrix taking unit vector `source` onto unit vector `target`.

    Uses Rodrigues' formula. The antiparallel case has no unique axis, so a
    half turn around any axis perpendicular to `source` is returned.
    """
    source = np.asarray(source, dtype=float)
    target = np.asarray(target, dtype=float)
    cosine = vector_dot(source, target)
    if cosine <= -1.0 + 1e-12:
        helper = x_direction() if abs(source[0]) < 0.9 else y_direction()
        axis = normalize_vector(vector_cross(source, helper))
        return 2.0 * np.outer(axis, axis) - np.eye(3)

    v = vector_cross(source, target)
    skew = np.array([
        [0.0, -v[2], v[1]],
        [v[2], 0.0, -v[0]],
        [-v[1], v[0], 0.0],
    ])
    return np.eye(3) + skew + (skew @ skew) / (1.0 + cosine)


def orthonormal_basis(normal: np.ndarray) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """(tangent, bitangent, normal) frame with `normal` as the local z axis."""
    helper = x_direction() if abs(normal[0]) < 0.9 else y_direction()
    tangent = normalize_vector(vector_cross(helper, normal))
    bitangent = vector_cross(normal, tangent)
    return tangent, bitangent, np.asarray(normal, dtype=float)


def clamp_color01(color_rgb: np.ndarray) -> np.ndarray:
    """Clamps an RGB color array to the range [0.0, 1.0]."""
    color_array = np.asarray(color_rgb, dtype=float)
    return np.clip(color_array, 0.0, 1.0)


def color_to_uint8(color_rgb: np.ndarray) -> np.ndarray:
    """Converts a floating-point RGB color array (clamped to [0, 1]) to 8-bit integer [0, 255]."""
    clamped_color = clamp_color01(color_rgb)
    return (clamped_color * 255.0 + 0.5).astype(np.uint8) # 0.5 before conversion ensures correct rounding
