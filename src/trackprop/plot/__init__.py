# src/trackprop/plot/__init__.py
"""
Matplotlib helpers for stepping traces (optional ``plot`` extra).

    from trackprop.plot import trace, export

    ax = trace.xy(result.get(StepTrace))
    trace.surface(ax, cylinder)
    export.savefig(ax, "helix.png")
"""
from __future__ import annotations

from . import _export as export
from . import _trace as trace

__all__ = ["export", "trace"]
