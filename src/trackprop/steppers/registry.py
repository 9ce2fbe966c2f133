# src/trackprop/steppers/registry.py
from __future__ import annotations
from typing import Any, Callable, Dict

from .base import StepperSpec

__all__ = ["register", "get_stepper", "registry"]

# name -> factory (stepper class); steppers hold per-instance config (field, jit)
_registry: Dict[str, Callable[..., StepperSpec]] = {}

def register(name: str, factory: Callable[..., StepperSpec], aliases: tuple[str, ...] = ()) -> None:
    """
    Register a stepper factory under ``name`` and its aliases.
    Enforces uniqueness of the canonical name; aliases may overlap only
    if they point to the same factory.
    """
    if name in _registry and _registry[name] is not factory:
        raise ValueError(f"Stepper '{name}' already registered with a different factory.")
    _registry[name] = factory

    for alias in aliases:
        if alias in _registry and _registry[alias] is not factory:
            raise ValueError(f"Alias '{alias}' already registered for a different factory.")
        _registry[alias] = factory

def get_stepper(name: str, **kwargs: Any) -> StepperSpec:
    """
    Build the registered stepper 'name' with ``kwargs`` or raise KeyError.
    """
    try:
        factory = _registry[name]
    except KeyError:
        raise KeyError(f"Unknown stepper '{name}'. Known: {sorted(_registry)}") from None
    return factory(**kwargs)

def registry() -> Dict[str, Callable[..., StepperSpec]]:
    """
    Read-only-ish view (do not mutate externally).
    """
    return dict(_registry)
