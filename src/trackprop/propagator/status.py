# src/trackprop/propagator/status.py
from __future__ import annotations
from enum import IntEnum

__all__ = [
    "Direction", "Status", "StopReason", "StepStatus",
    # int constants (jit-friendly)
    "OK", "STEPFAIL", "NAN_DETECTED",
]


class Direction(IntEnum):
    """Propagation direction, relative to momentum."""
    BACKWARD = -1
    FORWARD = 1

    @classmethod
    def coerce(cls, value) -> "Direction":
        """Accept a Direction, +/-1 or 'forward'/'backward'."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().upper()
            if key in cls.__members__:
                return cls[key]
            raise ValueError(f"unknown direction {value!r}; expected 'forward' or 'backward'")
        if isinstance(value, bool):
            raise ValueError(f"unknown direction {value!r}")
        try:
            return cls(int(value))
        except (TypeError, ValueError):
            raise ValueError(f"unknown direction {value!r}; expected +1 or -1") from None


class Status(IntEnum):
    """Result status of a propagate() call."""
    SUCCESS = 0
    FAILURE = 1
    UNSET = 2
    IN_PROGRESS = 3
    WRONG_DIRECTION = 4


class StopReason(IntEnum):
    """What ended the step loop."""
    NONE = 0
    USER_ABORT = 1
    TARGET_REACHED = 2
    PATH_LIMIT = 3
    MAX_STEPS = 4
    STEPPER_FAILURE = 5
    DEGENERATE_START = 6
    WRONG_DIRECTION = 7


class StepStatus(IntEnum):
    """Codes a stepper writes into ``cache.status``."""
    OK = 0              # step accepted, loop may proceed
    STEPFAIL = 2        # numerical failure inside the stepper
    NAN_DETECTED = 3    # non-finite state produced


# Plain int constants for JIT friendliness in kernels / tests
OK: int = int(StepStatus.OK)
STEPFAIL: int = int(StepStatus.STEPFAIL)
NAN_DETECTED: int = int(StepStatus.NAN_DETECTED)
