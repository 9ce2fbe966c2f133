# src/trackprop/propagator/__init__.py
from .status import Direction, Status, StopReason, StepStatus, OK, STEPFAIL, NAN_DETECTED
from .lists import Action, AbortCondition, ActionList, AbortList
from .aborters import PathLimitReached, SurfaceReached
from .result import Result
from .options import Options
from .propagator import Propagator

__all__ = [
    "Direction", "Status", "StopReason", "StepStatus", "OK", "STEPFAIL", "NAN_DETECTED",
    "Action", "AbortCondition", "ActionList", "AbortList",
    "PathLimitReached", "SurfaceReached",
    "Result", "Options", "Propagator",
]
