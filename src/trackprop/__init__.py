# src/trackprop/__init__.py
from __future__ import annotations

# Re-export frozen constants/types for stable imports
from trackprop.propagator.status import (
    Direction, Status, StopReason, StepStatus, OK, STEPFAIL, NAN_DETECTED,
)
from .propagator import (
    ActionList, AbortList, Options, Propagator, Result,
    PathLimitReached, SurfaceReached,
)
from .track import CurvilinearParameters, BoundParameters
from .surfaces import PlaneSurface, CylinderSurface
from .fields import ConstantField, NullField

from .steppers.base import StepperMeta, StepperInfo, StepperCaps, StepperSpec, StepperCache
from .steppers.registry import register, get_stepper, registry

from . import units
from .config import load_options
from .errors import TrackpropError, ConfigError, DuplicateResultError, StepperCapabilityError


__all__ = [
    # Core entry points
    "make_propagator", "Propagator", "Options", "Result", "load_options",
    # Composition
    "ActionList", "AbortList", "PathLimitReached", "SurfaceReached",
    # Status codes
    "Direction", "Status", "StopReason", "StepStatus", "OK", "STEPFAIL", "NAN_DETECTED",
    # Track parameters / geometry / field
    "CurvilinearParameters", "BoundParameters", "PlaneSurface", "CylinderSurface",
    "ConstantField", "NullField",
    # Stepper registry
    "StepperMeta", "StepperInfo", "StepperCaps", "StepperSpec", "StepperCache",
    "register", "get_stepper", "registry",
    # Errors
    "TrackpropError", "ConfigError", "DuplicateResultError", "StepperCapabilityError",
]


def make_propagator(stepper: str = "straight_line", **stepper_kwargs) -> Propagator:
    """Build a registered stepper and wrap it in a Propagator in one call.

    Parameters:
        stepper: Registered stepper name or alias ("straight_line", "rk4", ...).
        **stepper_kwargs: Forwarded to the stepper constructor, e.g. ``field=``
            and ``jit=`` for "rk4".

    Returns:
        A Propagator driving the requested stepper.

    Example:
        Helix in a 2 T solenoid field::

            from trackprop import make_propagator, ConstantField, Options, units

            prop = make_propagator("rk4", field=ConstantField([0, 0, 2 * units.T]))
            result = prop.propagate(start, Options(max_path_length=1 * units.m))
    """
    return Propagator(get_stepper(stepper, **stepper_kwargs))
