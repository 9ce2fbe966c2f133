# src/trackprop/config.py
"""
Build Options from a TOML file or an already-parsed mapping.

Expected layout::

    [propagation]
    direction = "forward"          # or "backward", 1, -1
    max_steps = 1000
    target_tolerance = "1 um"      # numbers are taken in base units (mm)
    max_step_size = "1 m"
    max_path_length = "10 m"       # "inf" for no budget

A mapping without a ``propagation`` table is taken to be the table itself.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Mapping, Optional
import warnings

from trackprop.errors import ConfigError
from trackprop.propagator.lists import AbortList, ActionList
from trackprop.propagator.options import Options
from trackprop.propagator.status import Direction
from trackprop.units import parse_quantity

try:  # pragma: no cover - Python >=3.11
    import tomllib  # type: ignore
except Exception:  # pragma: no cover
    import tomli as tomllib  # type: ignore

__all__ = ["load_options", "read_config"]

_LENGTH_KEYS = ("target_tolerance", "max_step_size", "max_path_length")
_VALID_KEYS = frozenset(("direction", "max_steps") + _LENGTH_KEYS)


def read_config(path: str | Path) -> Dict[str, Any]:
    """Parse a TOML file, raising ConfigError for missing or malformed files."""
    path = Path(path)
    try:
        with open(path, "rb") as fh:
            return tomllib.load(fh)
    except FileNotFoundError:
        raise ConfigError(f"Config file not found: {path}") from None
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Malformed TOML in {path}: {exc}") from exc


def _options_kwargs(section: Mapping[str, Any]) -> Dict[str, Any]:
    unknown = set(section) - _VALID_KEYS
    if unknown:
        warnings.warn(
            f"Unknown propagation options ignored: {sorted(unknown)}. "
            f"Valid options: {sorted(_VALID_KEYS)}",
            RuntimeWarning,
            stacklevel=3,
        )

    kwargs: Dict[str, Any] = {}
    if "direction" in section:
        try:
            kwargs["direction"] = Direction.coerce(section["direction"])
        except ValueError as exc:
            raise ConfigError(f"[propagation].direction: {exc}") from None
    if "max_steps" in section:
        steps = section["max_steps"]
        if isinstance(steps, bool) or not isinstance(steps, int):
            raise ConfigError(f"[propagation].max_steps must be an integer; got {steps!r}")
        kwargs["max_steps"] = steps
    for key in _LENGTH_KEYS:
        if key not in section:
            continue
        try:
            kwargs[key] = parse_quantity(section[key])
        except ValueError as exc:
            raise ConfigError(f"[propagation].{key}: {exc}") from None
    return kwargs


def load_options(
    source: str | Path | Mapping[str, Any],
    *,
    action_list: Optional[ActionList] = None,
    stop_conditions: Optional[AbortList] = None,
    table: str = "propagation",
) -> Options:
    """
    Create Options from ``source`` (TOML path or mapping).

    Lists are not configurable from files; pass them explicitly.
    Unknown keys emit a RuntimeWarning; bad values raise ConfigError.
    """
    data = source if isinstance(source, Mapping) else read_config(source)
    section = data.get(table, data)
    if not isinstance(section, Mapping):
        raise ConfigError(f"[{table}] must be a table; got {type(section).__name__}")

    kwargs = _options_kwargs(section)
    if action_list is not None:
        kwargs["action_list"] = action_list
    if stop_conditions is not None:
        kwargs["stop_conditions"] = stop_conditions
    return Options(**kwargs)
