# src/trackprop/utils/guards.py
from __future__ import annotations

import math
from typing import Callable
import numpy as np

from trackprop.utils.jit import njit

__all__ = ["allfinite1d", "select_allfinite_guard"]


def _allfinite1d_impl(x: np.ndarray) -> bool:
    for i in range(x.size):
        if not math.isfinite(x[i]):
            return False
    return True


allfinite1d = _allfinite1d_impl
_allfinite1d_jit = njit(cache=True)(_allfinite1d_impl) if njit is not None else _allfinite1d_impl


def select_allfinite_guard(jit_enabled: bool) -> Callable[[np.ndarray], bool]:
    """Return the numba guard for jitted callers, the Python one otherwise."""
    if jit_enabled and njit is not None:
        return _allfinite1d_jit
    return allfinite1d
