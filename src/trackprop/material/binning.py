# src/trackprop/material/binning.py
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple
import numpy as np

__all__ = ["BinningAxis", "BinUtility", "binning_value"]

_VALUES = ("x", "y", "z", "r", "phi")


def binning_value(position: np.ndarray, value: str) -> float:
    """Coordinate of ``position`` used for binning along ``value``."""
    if value == "x":
        return float(position[0])
    if value == "y":
        return float(position[1])
    if value == "z":
        return float(position[2])
    if value == "r":
        return float(math.hypot(position[0], position[1]))
    if value == "phi":
        return float(math.atan2(position[1], position[0]))
    raise ValueError(f"unknown binning value '{value}'; expected one of {_VALUES}")


@dataclass(frozen=True)
class BinningAxis:
    """Equidistant binning of one coordinate over [lo, hi); out-of-range values clamp."""
    value: str
    bins: int
    lo: float
    hi: float

    def __post_init__(self) -> None:
        if self.value not in _VALUES:
            raise ValueError(f"unknown binning value '{self.value}'; expected one of {_VALUES}")
        if self.bins < 1:
            raise ValueError(f"bins must be >= 1; got {self.bins}")
        if not (self.hi > self.lo):
            raise ValueError(f"hi must exceed lo; got [{self.lo}, {self.hi})")

    def bin(self, x: float) -> int:
        idx = int(math.floor((x - self.lo) / (self.hi - self.lo) * self.bins))
        return min(max(idx, 0), self.bins - 1)


class BinUtility:
    """
    Up to two binning axes; a missing second axis behaves as a single bin.
    """

    def __init__(self, *axes: BinningAxis):
        if not 1 <= len(axes) <= 2:
            raise ValueError(f"BinUtility takes one or two axes; got {len(axes)}")
        self.axes: Tuple[BinningAxis, ...] = tuple(axes)

    def bins(self, axis: int) -> int:
        if axis >= len(self.axes):
            return 1
        return self.axes[axis].bins

    def max(self, axis: int) -> int:
        """Highest valid bin index along ``axis``."""
        return self.bins(axis) - 1

    def bin(self, position, axis: int) -> int:
        if axis >= len(self.axes):
            return 0
        ax = self.axes[axis]
        return ax.bin(binning_value(np.asarray(position), ax.value))

    @property
    def shape(self) -> Tuple[int, int]:
        """Matrix shape (bins along axis 1, bins along axis 0)."""
        return (self.bins(1), self.bins(0))

    def __repr__(self) -> str:
        return f"BinUtility({', '.join(repr(a) for a in self.axes)})"
