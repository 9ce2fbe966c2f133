# src/trackprop/errors.py
from __future__ import annotations
from typing import Iterable, List

__all__ = [
    "TrackpropError",
    "ConfigError",
    "DuplicateResultError",
    "StepperCapabilityError",
]

class TrackpropError(Exception):
    """Base error for the trackprop package."""


class ConfigError(TrackpropError):
    """Raised when propagation options or a config file are malformed."""
    def __init__(self, message: str):
        super().__init__(message)


class DuplicateResultError(ConfigError):
    """Raised when an action/abort list is composed with clashing members."""
    def __init__(self, kind: str, duplicates: Iterable[str]):
        self.kind = kind
        self.duplicates: List[str] = sorted(set(duplicates))
        msg = f"Duplicate {kind} in list composition:\n"
        for d in self.duplicates:
            msg += f"  - {d}\n"
        msg += "Each member must contribute a distinct type."
        super().__init__(msg)


class StepperCapabilityError(ConfigError):
    """Raised when a stepper does not provide what the propagator needs."""
    def __init__(self, stepper: str, missing: Iterable[str]):
        self.stepper = stepper
        self.missing = list(missing)
        msg = f"Stepper '{stepper}' cannot drive a propagation:\n"
        for m in self.missing:
            msg += f"  - {m}\n"
        super().__init__(msg)
