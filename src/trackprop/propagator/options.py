# src/trackprop/propagator/options.py
from __future__ import annotations

import dataclasses
import math
import numbers
from dataclasses import dataclass, field

from trackprop.units import m, um
from trackprop.errors import ConfigError
from trackprop.propagator.lists import AbortList, ActionList
from trackprop.propagator.status import Direction

__all__ = ["Options"]


@dataclass(frozen=True)
class Options:
    """
    Per-call propagation options.

    Fields:
      - direction: Direction.FORWARD / BACKWARD (scales step size and path limit)
      - max_steps: hard cap on stepper advances
      - target_tolerance: distance at which a surface / path limit counts as reached
      - max_step_size: absolute bound on a single step
      - max_path_length: absolute distance budget (sign comes from direction)
      - action_list: actions run after every step
      - stop_conditions: user abort conditions checked after the actions

    The option values are frozen; list members stay individually configurable
    via ``options.action_list.get(T)`` before the call.
    """
    direction: Direction = Direction.FORWARD
    max_steps: int = 1000
    target_tolerance: float = 1.0 * um
    max_step_size: float = 1.0 * m
    max_path_length: float = math.inf
    action_list: ActionList = field(default_factory=ActionList)
    stop_conditions: AbortList = field(default_factory=AbortList)

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "direction", Direction.coerce(self.direction))
        except ValueError as exc:
            raise ConfigError(str(exc)) from None

        steps = self.max_steps
        if (
            isinstance(steps, bool)
            or not isinstance(steps, numbers.Real)
            or (not isinstance(steps, numbers.Integral) and not float(steps).is_integer())
        ):
            raise ConfigError(f"max_steps must be an integer, got {self.max_steps!r}")
        object.__setattr__(self, "max_steps", int(self.max_steps))
        if self.max_steps < 0:
            raise ConfigError(f"max_steps must be >= 0, got {self.max_steps}")

        for name in ("target_tolerance", "max_step_size", "max_path_length"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                raise ConfigError(f"{name} must be a number, got {value!r}")
            object.__setattr__(self, name, float(value))

        if math.isnan(self.target_tolerance) or self.target_tolerance < 0.0:
            raise ConfigError(f"target_tolerance must be >= 0, got {self.target_tolerance}")
        if not (self.max_step_size > 0.0) or not math.isfinite(self.max_step_size):
            raise ConfigError(f"max_step_size must be finite and > 0, got {self.max_step_size}")
        if not (self.max_path_length >= 0.0):
            raise ConfigError(f"max_path_length must be >= 0, got {self.max_path_length}")

        if not isinstance(self.action_list, ActionList):
            raise ConfigError(f"action_list must be an ActionList, got {type(self.action_list).__name__}")
        if not isinstance(self.stop_conditions, AbortList):
            raise ConfigError(
                f"stop_conditions must be an AbortList, got {type(self.stop_conditions).__name__}"
            )

    @property
    def signed_step_size(self) -> float:
        return float(self.direction) * self.max_step_size

    @property
    def signed_path_limit(self) -> float:
        return abs(self.max_path_length) * float(self.direction)

    def replace(self, **changes) -> "Options":
        """Return a copy with ``changes`` applied (validated again)."""
        return dataclasses.replace(self, **changes)
