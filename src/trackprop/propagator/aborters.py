# src/trackprop/propagator/aborters.py
"""
Mandatory abort conditions owned by the propagator.

These are instantiated fresh inside every propagate() call and are never
exposed through Options, so a user cannot switch off a path budget or a
target surface by leaving the user AbortList empty.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Optional

from trackprop.propagator.status import Direction, StopReason

__all__ = ["PathLimitReached", "SurfaceReached"]


@dataclass
class PathLimitReached:
    """
    Fires once the accumulated signed path is within ``tolerance`` of the
    signed limit; otherwise caps the next step so it cannot overshoot.
    """
    signed_path_limit: float = math.inf
    tolerance: float = 0.0

    reason = StopReason.PATH_LIMIT

    def __call__(self, result: Any, cache: Any) -> bool:
        diff_to_limit = self.signed_path_limit - result.path_length
        if abs(diff_to_limit) <= self.tolerance:
            return True
        if abs(cache.step_size) > abs(diff_to_limit):
            cache.step_size = diff_to_limit
        return False


@dataclass
class SurfaceReached:
    """
    Fires once the straight-line distance to ``surface`` along the navigation
    direction is within ``tolerance``; otherwise caps the next step at that
    distance.

    The surface is borrowed: it must outlive the call and stay unmodified
    while the propagation runs.
    """
    surface: Optional[Any] = None
    direction: Direction = Direction.FORWARD
    tolerance: float = 0.0

    reason = StopReason.TARGET_REACHED

    def distance(self, cache: Any) -> float:
        """Signed distance to the surface, positive along the navigation direction."""
        nav_dir = float(self.direction) * cache.direction
        return float(self.surface.intersection_estimate(cache.position, nav_dir, self.tolerance))

    def target_behind(self, cache: Any) -> bool:
        if self.surface is None:
            return False
        distance = self.distance(cache)
        return math.isfinite(distance) and distance < -self.tolerance

    def __call__(self, result: Any, cache: Any) -> bool:
        if self.surface is None:
            return False
        distance = self.distance(cache)
        if abs(distance) <= self.tolerance:
            return True
        # step_size is signed along momentum; distance is along navigation
        if math.isfinite(distance) and abs(cache.step_size) > abs(distance):
            cache.step_size = float(self.direction) * distance
        return False
