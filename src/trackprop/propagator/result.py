# src/trackprop/propagator/result.py
from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional, TypeVar

from trackprop.propagator.status import Status, StopReason

__all__ = ["Result"]

R = TypeVar("R")


class Result:
    """
    Outcome of one propagate() call.

    Fields:
      - status: Status of the call
      - steps: number of stepper advances carried out (terminating step included)
      - path_length: signed distance propagated
      - end_parameters: final track parameters, set iff status == SUCCESS
      - stop_reason: which condition ended the loop (see StopReason)
      - aborted_by: name of the user abort condition that fired (function
        name, or class name for condition objects), if any

    Extension slots: one default-constructed payload per result type declared
    by the configured actions, read with ``result.get(T)`` or ``result[T]``.
    """

    __slots__ = (
        "status", "steps", "path_length", "end_parameters",
        "stop_reason", "aborted_by", "_extensions",
    )

    def __init__(self, status: Status = Status.UNSET, extensions: Iterable[type] = ()):
        self.status: Status = status
        self.steps: int = 0
        self.path_length: float = 0.0
        self.end_parameters: Optional[Any] = None
        self.stop_reason: StopReason = StopReason.NONE
        self.aborted_by: Optional[str] = None
        self._extensions: Dict[type, Any] = {}
        for result_type in extensions:
            if result_type in self._extensions:
                raise ValueError(f"extension slot {result_type.__name__} given twice")
            self._extensions[result_type] = result_type()

    # ---------------- extension slots ----------------

    def get(self, result_type: type[R]) -> R:
        try:
            return self._extensions[result_type]
        except KeyError:
            have = ", ".join(t.__name__ for t in self._extensions) or "none"
            raise KeyError(
                f"Result has no slot for {result_type.__name__} (slots: {have})"
            ) from None

    def __getitem__(self, result_type: type[R]) -> R:
        return self.get(result_type)

    def __contains__(self, result_type: object) -> bool:
        return result_type in self._extensions

    @property
    def extensions(self) -> Mapping[str, Any]:
        """Read-only view of the extension payloads keyed by type name."""
        return MappingProxyType({t.__name__: v for t, v in self._extensions.items()})

    # ---------------- validity ----------------

    @property
    def ok(self) -> bool:
        return self.end_parameters is not None and self.status == Status.SUCCESS

    def __bool__(self) -> bool:
        return self.ok

    def __repr__(self) -> str:
        return (
            f"Result(status={self.status.name}, steps={self.steps}, "
            f"path_length={self.path_length!r}, stop_reason={self.stop_reason.name}, "
            f"extensions={list(self.extensions)})"
        )
