# src/trackprop/surfaces.py
"""
Target surfaces.

The propagator only needs ``intersection_estimate``: the signed path length
along a straight line from ``position`` in ``direction`` to the surface.
Positive values lie ahead. ``inf`` means the line never meets the surface.
"""
from __future__ import annotations

import math
from typing import Optional, Protocol
import numpy as np

from trackprop.utils.arrays import frozen_copy, orthonormal_frame, require_unit, require_vector3

__all__ = ["Surface", "PlaneSurface", "CylinderSurface"]

_PARALLEL_EPS = 1e-12


class Surface(Protocol):
    identifier: Optional[int]

    def intersection_estimate(
        self, position: np.ndarray, direction: np.ndarray, tolerance: float = 0.0
    ) -> float: ...

    def global_to_local(self, position: np.ndarray) -> np.ndarray: ...


class PlaneSurface:
    """
    Infinite plane through ``center`` with unit ``normal``.

    ``identifier`` optionally ties the surface to a detector element.
    """

    def __init__(self, center, normal, identifier: Optional[int] = None):
        self.center = frozen_copy(require_vector3(center, "center"))
        self.normal = frozen_copy(require_unit(normal, "normal"))
        u, v = orthonormal_frame(self.normal)
        self._u = frozen_copy(u)
        self._v = frozen_copy(v)
        self.identifier = identifier

    def normal_distance(self, position: np.ndarray) -> float:
        return float(np.dot(self.normal, np.asarray(position) - self.center))

    def intersection_estimate(
        self, position: np.ndarray, direction: np.ndarray, tolerance: float = 0.0
    ) -> float:
        denom = float(np.dot(self.normal, direction))
        if abs(denom) < _PARALLEL_EPS:
            return math.inf
        return float(np.dot(self.normal, self.center - np.asarray(position))) / denom

    def global_to_local(self, position: np.ndarray) -> np.ndarray:
        rel = np.asarray(position) - self.center
        return np.array([np.dot(self._u, rel), np.dot(self._v, rel)])

    def __repr__(self) -> str:
        return (
            f"PlaneSurface(center={self.center.tolist()}, normal={self.normal.tolist()}, "
            f"identifier={self.identifier})"
        )


class CylinderSurface:
    """
    Infinite cylinder of ``radius`` around the line through ``center`` along ``axis``.

    Local coordinates are (radius * phi, z) in the cylinder frame.
    """

    def __init__(self, radius: float, center=(0.0, 0.0, 0.0), axis=(0.0, 0.0, 1.0),
                 identifier: Optional[int] = None):
        if not (radius > 0.0):
            raise ValueError(f"radius must be positive; got {radius}")
        self.radius = float(radius)
        self.center = frozen_copy(require_vector3(center, "center"))
        self.axis = frozen_copy(require_unit(axis, "axis"))
        u, v = orthonormal_frame(self.axis)
        self._u = frozen_copy(u)
        self._v = frozen_copy(v)
        self.identifier = identifier

    def _transverse(self, vec: np.ndarray) -> np.ndarray:
        return vec - np.dot(vec, self.axis) * self.axis

    def intersection_estimate(
        self, position: np.ndarray, direction: np.ndarray, tolerance: float = 0.0
    ) -> float:
        """
        Closest solution not behind ``position`` by more than ``tolerance``;
        if both lie behind, the nearer one (negative). ``inf`` if the line
        misses the cylinder or runs parallel to its axis.
        """
        pt = self._transverse(np.asarray(position) - self.center)
        dt = self._transverse(np.asarray(direction))
        a = float(np.dot(dt, dt))
        if a < _PARALLEL_EPS:
            return math.inf
        b = 2.0 * float(np.dot(pt, dt))
        c = float(np.dot(pt, pt)) - self.radius * self.radius
        disc = b * b - 4.0 * a * c
        if disc < 0.0:
            return math.inf
        root = math.sqrt(disc)
        s1 = (-b - root) / (2.0 * a)
        s2 = (-b + root) / (2.0 * a)
        ahead = [s for s in (s1, s2) if s >= -tolerance]
        if ahead:
            return min(ahead)
        return s2

    def global_to_local(self, position: np.ndarray) -> np.ndarray:
        rel = np.asarray(position) - self.center
        phi = math.atan2(float(np.dot(self._v, rel)), float(np.dot(self._u, rel)))
        return np.array([self.radius * phi, float(np.dot(self.axis, rel))])

    def __repr__(self) -> str:
        return (
            f"CylinderSurface(radius={self.radius}, center={self.center.tolist()}, "
            f"axis={self.axis.tolist()}, identifier={self.identifier})"
        )
