# src/trackprop/steppers/conversion.py
from __future__ import annotations
from typing import Any
import numpy as np

from trackprop.steppers.base import StepperCache
from trackprop.track import BoundParameters, CurvilinearParameters

__all__ = ["ConversionMixin"]


class ConversionMixin:
    """
    Cache construction and cache -> public parameter conversion shared by the
    built-in steppers. ``start`` may be any object exposing ``position``,
    ``direction``, ``qop``, ``charge`` and ``covariance``.
    """

    def make_cache(self, start: Any, step_size: float | None = None) -> StepperCache:
        cov = getattr(start, "covariance", None)
        return StepperCache(
            position=np.array(start.position, dtype=np.float64, copy=True),
            direction=np.array(start.direction, dtype=np.float64, copy=True),
            qop=float(start.qop),
            charge=float(start.charge),
            step_size=0.0 if step_size is None else float(step_size),
            covariance=None if cov is None else np.array(cov, dtype=np.float64, copy=True),
        )

    def convert(self, cache: StepperCache) -> CurvilinearParameters:
        return CurvilinearParameters(
            position=cache.position,
            momentum=cache.momentum,
            charge=cache.charge,
            covariance=cache.covariance,
        )

    def convert_to_surface(self, cache: StepperCache, surface: Any) -> BoundParameters:
        return BoundParameters(
            position=cache.position,
            momentum=cache.momentum,
            charge=cache.charge,
            covariance=cache.covariance,
            surface=surface,
        )

    def return_parameter_type(self, start_type: type, surface_type: type | None = None) -> type:
        return CurvilinearParameters if surface_type is None else BoundParameters
