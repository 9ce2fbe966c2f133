# src/trackprop/material/properties.py
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional
import numpy as np

__all__ = ["Material", "MaterialProperties", "MaterialStep", "VACUUM"]


@dataclass(frozen=True)
class Material:
    """
    Bulk material description.

    Fields:
      - x0: radiation length [mm]
      - l0: nuclear interaction length [mm]
      - a: average atomic mass
      - z: average atomic number
      - rho: mass density
    """
    x0: float = math.inf
    l0: float = math.inf
    a: float = 0.0
    z: float = 0.0
    rho: float = 0.0

    def __post_init__(self) -> None:
        if not (self.x0 > 0.0) or not (self.l0 > 0.0):
            raise ValueError(f"x0 and l0 must be positive; got x0={self.x0}, l0={self.l0}")
        if self.rho < 0.0:
            raise ValueError(f"rho must be non-negative; got {self.rho}")

    @property
    def is_vacuum(self) -> bool:
        return math.isinf(self.x0) and self.rho == 0.0


VACUUM = Material()


@dataclass(frozen=True)
class MaterialProperties:
    """Material with a traversed thickness and the number of entries averaged into it."""
    material: Material = VACUUM
    thickness: float = 0.0
    entries: int = 1

    @property
    def thickness_in_x0(self) -> float:
        return self.thickness / self.material.x0

    @property
    def thickness_in_l0(self) -> float:
        return self.thickness / self.material.l0


@dataclass(frozen=True)
class MaterialStep:
    """One step of traversed material, optionally tagged with where it happened."""
    properties: MaterialProperties
    position: Optional[np.ndarray] = field(default=None, compare=False)
