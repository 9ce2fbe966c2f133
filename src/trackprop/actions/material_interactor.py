# src/trackprop/actions/material_interactor.py
"""
Material interaction along the propagated path.

Treats the whole propagation as running through one homogeneous material
(or several, via a ``material_at(position)`` provider) and accumulates the
traversed thickness and the Highland multiple-scattering variance.
"""
from __future__ import annotations

import math
from typing import Any, Callable, List, Optional, Union

from trackprop.units import MeV
from trackprop.material.properties import Material, MaterialProperties, MaterialStep

__all__ = ["MaterialInteraction", "MaterialInteractor", "highland_theta0", "MUON_MASS"]

MUON_MASS = 105.6583745 * MeV

MaterialSource = Union[Material, Callable[[Any], Optional[Material]], None]


def highland_theta0(thickness_in_x0: float, momentum: float, mass: float, charge: float = 1.0) -> float:
    """Width of the projected scattering angle (Highland formula, PDG)."""
    if thickness_in_x0 <= 0.0 or charge == 0.0:
        return 0.0
    energy = math.hypot(momentum, mass)
    beta = momentum / energy
    x = thickness_in_x0 * charge * charge / (beta * beta)
    return 13.6 * MeV * abs(charge) / (beta * momentum) * math.sqrt(thickness_in_x0) * (
        1.0 + 0.038 * math.log(x)
    )


class MaterialInteraction:
    """Accumulated material seen along the path."""

    def __init__(self) -> None:
        self.thickness_in_x0 = 0.0
        self.thickness_in_l0 = 0.0
        self.sigma_theta_sq = 0.0
        self.material_steps: List[MaterialStep] = []

    @property
    def sigma_theta(self) -> float:
        return math.sqrt(self.sigma_theta_sq)


class MaterialInteractor:
    """
    Action adding the material of every step to the MaterialInteraction slot.

    Also writes the step's scattering variance into ``cache.scattering_variance``
    so that actions placed after it in the list can use it in the same step.
    """

    result_type = MaterialInteraction

    def __init__(self, material: MaterialSource = None, mass: float = MUON_MASS, record_steps: bool = True):
        self.material = material
        self.mass = mass
        self.record_steps = record_steps

    def _material_at(self, position) -> Optional[Material]:
        if self.material is None or isinstance(self.material, Material):
            return self.material
        return self.material(position)

    def __call__(self, cache: Any, result: Any) -> None:
        cache.scattering_variance = 0.0
        mat = self._material_at(cache.position)
        thickness = abs(cache.last_step)
        if mat is None or mat.is_vacuum or thickness == 0.0:
            return

        props = MaterialProperties(mat, thickness)
        slot = result.get(MaterialInteraction)
        slot.thickness_in_x0 += props.thickness_in_x0
        slot.thickness_in_l0 += props.thickness_in_l0
        theta0 = highland_theta0(props.thickness_in_x0, cache.absolute_momentum, self.mass, cache.charge)
        cache.scattering_variance = theta0 * theta0
        slot.sigma_theta_sq += cache.scattering_variance
        if self.record_steps:
            slot.material_steps.append(MaterialStep(props, cache.position.copy()))
