# src/trackprop/track.py
"""
Public track parameter types produced and consumed by propagation.

Both types are immutable value objects holding read-only numpy arrays:
propagating never alters the caller's start parameters, and a Result can
hand out its end parameters without copying them.
"""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Optional
import numpy as np

from trackprop.utils.arrays import frozen_copy, require_vector3

__all__ = ["CurvilinearParameters", "BoundParameters"]


@dataclass(frozen=True, eq=False)
class CurvilinearParameters:
    """
    Free track parameters: global position, global momentum vector, charge
    and an optional covariance matrix. ``charge == 0`` denotes a neutral
    particle.
    """
    position: np.ndarray
    momentum: np.ndarray
    charge: float = 1.0
    covariance: Optional[np.ndarray] = None

    def __post_init__(self) -> None:
        position = require_vector3(self.position, "position")
        momentum = require_vector3(self.momentum, "momentum")
        if not np.any(momentum):
            raise ValueError("momentum must be non-zero")
        object.__setattr__(self, "position", frozen_copy(position))
        object.__setattr__(self, "momentum", frozen_copy(momentum))
        object.__setattr__(self, "charge", float(self.charge))
        if self.covariance is not None:
            cov = np.array(self.covariance, dtype=np.float64, copy=True)
            if cov.ndim != 2 or cov.shape[0] != cov.shape[1]:
                raise ValueError(f"covariance must be a square matrix; got shape {cov.shape}")
            object.__setattr__(self, "covariance", frozen_copy(cov))

    @property
    def absolute_momentum(self) -> float:
        return float(np.linalg.norm(self.momentum))

    @property
    def direction(self) -> np.ndarray:
        return self.momentum / self.absolute_momentum

    @property
    def qop(self) -> float:
        """Charge over momentum; 1/p for neutral particles."""
        if self.charge != 0.0:
            return self.charge / self.absolute_momentum
        return 1.0 / self.absolute_momentum

    def copy(self):
        return dataclasses.replace(self)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(position={self.position.tolist()}, "
            f"momentum={self.momentum.tolist()}, charge={self.charge})"
        )


@dataclass(frozen=True, eq=False)
class BoundParameters(CurvilinearParameters):
    """Track parameters expressed on a reference surface."""
    surface: Any = None

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.surface is None:
            raise ValueError("BoundParameters require a reference surface")

    @property
    def local_position(self) -> np.ndarray:
        """Local 2D coordinates of the position on the reference surface."""
        return self.surface.global_to_local(self.position)
