# src/trackprop/steppers/straight_line.py
"""
Straight-line stepper: ignores any field and moves along the current direction.

Exact and reversible; used for neutral particles and field-free regions.
"""
from __future__ import annotations

from .base import StepperCaps, StepperMeta, StepperCache
from .conversion import ConversionMixin
from trackprop.propagator.status import OK
from trackprop.track import BoundParameters, CurvilinearParameters

__all__ = ["StraightLineStepper"]


class StraightLineStepper(ConversionMixin):
    """
    position_{n+1} = position_n + h * direction_n, direction unchanged.
    """
    def __init__(self, meta: StepperMeta | None = None):
        if meta is None:
            meta = StepperMeta(
                name="straight_line",
                family="line",
                order=1,
                aliases=("straight", "line"),
                return_types=(CurvilinearParameters, BoundParameters),
                caps=StepperCaps(reversible=True),
            )
        self.meta = meta

    def step(self, cache: StepperCache) -> float:
        h = cache.step_size
        cache.position = cache.position + h * cache.direction
        cache.last_step = h
        cache.status = OK
        return h


# Auto-register on module import
def _auto_register():
    from .registry import register
    register("straight_line", StraightLineStepper, aliases=("straight", "line"))

_auto_register()
