# src/trackprop/utils/arrays.py
from __future__ import annotations
from typing import Any
import numpy as np

__all__ = [
    "require_vector3", "require_unit", "frozen_copy", "orthonormal_frame",
]

def require_vector3(a: Any, name: str = "vector") -> np.ndarray:
    """
    Return 'a' as a fresh float64 array of shape (3,). Raise ValueError if the
    shape is wrong or any component is non-finite.
    (Guard only; not for hot loops.)
    """
    arr = np.array(a, dtype=np.float64, copy=True)
    if arr.shape != (3,):
        raise ValueError(f"{name} must have shape (3,); got {arr.shape}")
    if not np.all(np.isfinite(arr)):
        raise ValueError(f"{name} must be finite; got {arr}")
    return arr

def require_unit(a: Any, name: str = "vector") -> np.ndarray:
    """
    Return 'a' normalized to unit length. Raise ValueError for a zero vector.
    """
    arr = require_vector3(a, name)
    norm = float(np.linalg.norm(arr))
    if norm == 0.0:
        raise ValueError(f"{name} must be non-zero")
    return arr / norm

def frozen_copy(a: np.ndarray) -> np.ndarray:
    """
    Return a read-only copy of 'a' so value objects cannot be mutated in place.
    """
    out = np.array(a, copy=True)
    out.setflags(write=False)
    return out

def orthonormal_frame(normal: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """
    Return (u, v) completing the unit vector 'normal' to a right-handed frame
    (u, v, normal). Uses the global z axis as reference unless 'normal' is
    (anti)parallel to it.
    """
    ref = np.array([0.0, 0.0, 1.0]) if abs(normal[2]) < 0.99 else np.array([1.0, 0.0, 0.0])
    u = np.cross(ref, normal)
    u /= np.linalg.norm(u)
    v = np.cross(normal, u)
    return u, v
