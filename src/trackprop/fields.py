# src/trackprop/fields.py
from __future__ import annotations
from typing import Protocol
import numpy as np

from trackprop.utils.arrays import frozen_copy, require_vector3

__all__ = ["MagneticField", "ConstantField", "NullField"]


class MagneticField(Protocol):
    """Field capability consumed by field-aware steppers (internal units)."""

    def get_field(self, position: np.ndarray) -> np.ndarray: ...


class ConstantField:
    """Homogeneous field; ``b`` is given in internal units (use ``units.T``)."""

    def __init__(self, b):
        self._b = frozen_copy(require_vector3(b, "b"))

    @property
    def b(self) -> np.ndarray:
        return self._b

    def get_field(self, position: np.ndarray) -> np.ndarray:
        return self._b

    def __repr__(self) -> str:
        return f"ConstantField(b={self._b.tolist()})"


class NullField(ConstantField):
    """Field-free region."""

    def __init__(self):
        super().__init__((0.0, 0.0, 0.0))

    def __repr__(self) -> str:
        return "NullField()"
