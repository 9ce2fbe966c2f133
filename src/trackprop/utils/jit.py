# src/trackprop/utils/jit.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable
import warnings

# JIT toggle applied *only here*.
# If numba missing or jit=False, we return original Python callables.

__all__ = ["JittedCallable", "jit_compile", "njit", "numba_available"]


@dataclass(frozen=True)
class JittedCallable:
    fn: Callable
    jitted: bool
    component: str | None = None

try:
    from numba import njit
    _NUMBA_OK = True
except Exception:
    _NUMBA_OK = False
    njit = None  # type: ignore


def numba_available() -> bool:
    return _NUMBA_OK


def jit_compile(fn: Callable, *, jit: bool = True, component: str | None = None) -> JittedCallable:
    """
    Centralized JIT compilation with consistent error handling.

    Behavior:
        - If jit=False: returns original Python function
        - If jit=True and numba not installed: warns and returns original function
        - If jit=True and numba installed but compilation fails: raises RuntimeError with details

    Numba compiles lazily, so failures surface on the first call; callers
    that want an early error should invoke the kernel once after compiling.
    """
    if not jit:
        return JittedCallable(fn=fn, jitted=False, component=component)

    if not _NUMBA_OK:
        # Numba not installed: graceful fallback with warning
        warnings.warn(
            "Numba not found; falling back to pure Python (slower). "
            "Install numba for faster stepping: pip install numba",
            RuntimeWarning,
            stacklevel=3,  # Point to caller's caller
        )
        return JittedCallable(fn=fn, jitted=False, component=component)

    try:
        compiled = njit(cache=False)(fn)
    except Exception as e:
        # Numba installed but compilation failed: hard error
        raise RuntimeError(
            f"JIT compilation with numba failed for {component or fn.__name__}: "
            f"{type(e).__name__}: {e}"
        ) from e
    return JittedCallable(fn=compiled, jitted=True, component=component)
