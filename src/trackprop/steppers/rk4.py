# src/trackprop/steppers/rk4.py
"""
RK4 (Runge-Kutta 4th order, fixed step) stepper for charged tracks in a
magnetic field.

Integrates the equations of motion in the path length s:
    dr/ds = T
    dT/ds = (q/p) * (T x B)
with B in internal units (GeV/(e*mm)), so no conversion factor appears.
"""
from __future__ import annotations

import math
from typing import TYPE_CHECKING
import numpy as np

from .base import StepperCaps, StepperMeta, StepperCache
from .conversion import ConversionMixin
from trackprop.fields import NullField
from trackprop.propagator.status import NAN_DETECTED, OK
from trackprop.track import BoundParameters, CurvilinearParameters
from trackprop.utils.guards import select_allfinite_guard
from trackprop.utils.jit import jit_compile

if TYPE_CHECKING:
    from trackprop.fields import MagneticField

__all__ = ["RungeKuttaStepper"]


def _rk4_kernel(pos, tdir, lam, b, h, out):
    # out[0:3] = new position, out[3:6] = new unit direction
    bx = b[0]
    by = b[1]
    bz = b[2]

    # Stage 1: k1 = f(T)
    t1x = tdir[0]
    t1y = tdir[1]
    t1z = tdir[2]
    a1x = lam * (t1y * bz - t1z * by)
    a1y = lam * (t1z * bx - t1x * bz)
    a1z = lam * (t1x * by - t1y * bx)

    # Stage 2: k2 = f(T + h/2 * A1)
    half = 0.5 * h
    t2x = t1x + half * a1x
    t2y = t1y + half * a1y
    t2z = t1z + half * a1z
    a2x = lam * (t2y * bz - t2z * by)
    a2y = lam * (t2z * bx - t2x * bz)
    a2z = lam * (t2x * by - t2y * bx)

    # Stage 3: k3 = f(T + h/2 * A2)
    t3x = t1x + half * a2x
    t3y = t1y + half * a2y
    t3z = t1z + half * a2z
    a3x = lam * (t3y * bz - t3z * by)
    a3y = lam * (t3z * bx - t3x * bz)
    a3z = lam * (t3x * by - t3y * bx)

    # Stage 4: k4 = f(T + h * A3)
    t4x = t1x + h * a3x
    t4y = t1y + h * a3y
    t4z = t1z + h * a3z
    a4x = lam * (t4y * bz - t4z * by)
    a4y = lam * (t4z * bx - t4x * bz)
    a4z = lam * (t4x * by - t4y * bx)

    # Combine
    w = h / 6.0
    out[0] = pos[0] + w * (t1x + 2.0 * t2x + 2.0 * t3x + t4x)
    out[1] = pos[1] + w * (t1y + 2.0 * t2y + 2.0 * t3y + t4y)
    out[2] = pos[2] + w * (t1z + 2.0 * t2z + 2.0 * t3z + t4z)

    tx = t1x + w * (a1x + 2.0 * a2x + 2.0 * a3x + a4x)
    ty = t1y + w * (a1y + 2.0 * a2y + 2.0 * a3y + a4y)
    tz = t1z + w * (a1z + 2.0 * a2z + 2.0 * a3z + a4z)
    norm = math.sqrt(tx * tx + ty * ty + tz * tz)
    inv = 1.0 / norm if norm > 0.0 else math.nan
    out[3] = tx * inv
    out[4] = ty * inv
    out[5] = tz * inv


class RungeKuttaStepper(ConversionMixin):
    """
    Classic 4th-order Runge-Kutta stepper in a magnetic field.

    The field is sampled once per step at the step start. Neutral particles
    (charge 0) move on straight lines. Non-finite results leave the cache
    untouched and set ``cache.status = NAN_DETECTED``.

    Parameters:
        field: MagneticField capability (defaults to NullField)
        jit: compile the stage kernel with numba (falls back with a warning)
    """
    def __init__(self, field: MagneticField | None = None, *, jit: bool = False,
                 meta: StepperMeta | None = None):
        if meta is None:
            meta = StepperMeta(
                name="rk4",
                family="runge-kutta",
                order=4,
                aliases=("runge_kutta", "rk4_classic"),
                return_types=(CurvilinearParameters, BoundParameters),
                caps=StepperCaps(field_aware=True, jit=True),
            )
        self.meta = meta
        self.field = NullField() if field is None else field
        compiled = jit_compile(_rk4_kernel, jit=jit, component="rk4_kernel")
        self.jitted = compiled.jitted
        self._kernel = compiled.fn
        self._allfinite = select_allfinite_guard(self.jitted)

    def step(self, cache: StepperCache) -> float:
        h = cache.step_size
        lam = cache.qop if cache.charge != 0.0 else 0.0
        b = np.asarray(self.field.get_field(cache.position), dtype=np.float64)
        out = np.empty(6, dtype=np.float64)
        self._kernel(cache.position, cache.direction, lam, b, h, out)
        if not self._allfinite(out):
            cache.last_step = 0.0
            cache.status = NAN_DETECTED
            return 0.0
        cache.position = out[:3].copy()
        cache.direction = out[3:].copy()
        cache.last_step = h
        cache.status = OK
        return h


# Auto-register on module import
def _auto_register():
    from .registry import register
    register("rk4", RungeKuttaStepper, aliases=("runge_kutta", "rk4_classic"))

_auto_register()
