# src/trackprop/steppers/__init__.py
from .base import StepperCaps, StepperMeta, StepperInfo, StepperSpec, StepperCache
from .registry import register, get_stepper, registry

# Import concrete steppers to trigger auto-registration
from .straight_line import StraightLineStepper
from .rk4 import RungeKuttaStepper

__all__ = [
    "StepperCaps", "StepperMeta", "StepperInfo", "StepperSpec", "StepperCache",
    "register", "get_stepper", "registry",
    "StraightLineStepper", "RungeKuttaStepper",
]
