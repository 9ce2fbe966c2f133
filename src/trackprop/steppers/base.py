# src/trackprop/steppers/base.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Optional, Protocol, Tuple
import numpy as np

from trackprop.propagator.status import OK

__all__ = [
    "StepperCaps", "StepperMeta", "StepperInfo", "StepperSpec", "StepperCache",
]

# NOTE: When you need to add a stepper with a new capability add a field below.
#       Existing steppers keep the defaults for the fields they don't specify.
@dataclass(frozen=True)
class StepperCaps:
    """
    Optional / implementation-level capabilities.
    These can be added or removed without changing what the method integrates.
    """
    field_aware: bool = False            # bends charged tracks in a magnetic field
    reversible: bool = False             # backward(forward(s, L), L) == s exactly
    covariance_transport: bool = False   # transports the covariance (else carried unchanged)
    jit: bool = False                    # kernel can be compiled with numba


@dataclass(frozen=True)
class StepperMeta:
    """
    Public metadata for a stepper.

    ``return_types`` lists every public parameter type ``convert`` /
    ``convert_to_surface`` can produce; the propagator checks them once
    when it is constructed.
    """
    name: str
    family: str = ""
    order: int = 1
    aliases: tuple[str, ...] = ()
    return_types: Tuple[type, ...] = ()
    caps: StepperCaps = field(default_factory=StepperCaps)

# Alias kept for symmetry with the registry API
StepperInfo = StepperMeta


@dataclass
class StepperCache:
    """
    Mutable per-call stepping state. Owned by exactly one propagate() call.

    Fields:
      - position, direction: global position and unit momentum direction
      - qop: charge over absolute momentum (1/p for neutral particles)
      - charge: particle charge (0 means no field bending)
      - step_size: signed size of the next step (sign = propagation direction)
      - last_step: signed length of the step just taken
      - covariance: optional 5x5/6x6 covariance, carried along
      - status: StepStatus code written by the stepper (OK unless it failed)
      - scattering_variance: per-step scattering variance left by material actions
    """
    position: np.ndarray
    direction: np.ndarray
    qop: float
    charge: float
    step_size: float = 0.0
    last_step: float = 0.0
    covariance: Optional[np.ndarray] = None
    status: int = OK
    scattering_variance: float = 0.0

    @property
    def absolute_momentum(self) -> float:
        if self.charge != 0.0:
            return abs(self.charge / self.qop)
        return abs(1.0 / self.qop)

    @property
    def momentum(self) -> np.ndarray:
        return self.absolute_momentum * self.direction


class StepperSpec(Protocol):
    """
    Interface a stepper must provide to drive a Propagator.

    Implementations MUST:
      - expose ``meta: StepperMeta``
      - provide ``make_cache(start, step_size=None) -> StepperCache``
      - provide ``step(cache) -> float``: advance by ``cache.step_size`` (clipped
        by the stepper if it must), return the signed distance advanced and set
        ``cache.status`` to a non-OK code on numerical failure
      - provide ``convert(cache)`` -> public curvilinear parameters
      - provide ``convert_to_surface(cache, surface)`` -> public bound parameters
      - provide ``return_parameter_type(start_type, surface_type=None) -> type``
    """

    meta: StepperMeta

    def make_cache(self, start: Any, step_size: float | None = None) -> StepperCache: ...
    def step(self, cache: StepperCache) -> float: ...
    def convert(self, cache: StepperCache) -> Any: ...
    def convert_to_surface(self, cache: StepperCache, surface: Any) -> Any: ...
    def return_parameter_type(self, start_type: type, surface_type: type | None = None) -> type: ...
