# src/trackprop/plot/_trace.py
"""
Projections of a stepping trace.

All functions accept a ``StepTrace`` (from ``SteppingLogger``) or anything
convertible to an ``(n, 3)`` position array, draw into ``ax`` (a new
figure when omitted) and return the axes.
"""
from __future__ import annotations

import math
from typing import Any
import numpy as np
import matplotlib.pyplot as plt

from trackprop.surfaces import CylinderSurface, PlaneSurface

__all__ = ["xy", "rz", "surface"]


def _get_ax(ax=None) -> plt.Axes:
    if ax is not None:
        return ax
    _fig, created_ax = plt.subplots(layout="constrained")
    return created_ax


def _positions(trace: Any) -> np.ndarray:
    pos = getattr(trace, "positions", trace)
    arr = np.asarray(pos, dtype=float)
    if arr.ndim != 2 or arr.shape[1] != 3:
        raise ValueError(f"expected positions of shape (n, 3); got {arr.shape}")
    return arr


def _apply_labels(ax: plt.Axes, *, xlabel: str | None, ylabel: str | None, title: str | None) -> None:
    if xlabel is not None:
        ax.set_xlabel(xlabel)
    if ylabel is not None:
        ax.set_ylabel(ylabel)
    if title is not None:
        ax.set_title(title)


def xy(
    trace,
    *,
    ax=None,
    label: str | None = None,
    color: str | None = None,
    marker: str | None = ".",
    equal: bool = True,
    title: str | None = None,
) -> plt.Axes:
    """
    Transverse view (y versus x) of the step positions.

    Args:
        trace: StepTrace or (n, 3) position array [mm]
        ax: Existing axes to plot on
        label: Legend label; the legend is drawn when given
        color: Line/marker color
        marker: Marker drawn at every step end (None for a plain line)
        equal: Use equal aspect so helices look circular
        title: Plot title

    Returns:
        Matplotlib axes object
    """
    pos = _positions(trace)
    plot_ax = _get_ax(ax)
    plot_ax.plot(pos[:, 0], pos[:, 1], label=label, color=color, marker=marker)
    if equal:
        plot_ax.set_aspect("equal", adjustable="datalim")
    if label:
        plot_ax.legend()
    _apply_labels(plot_ax, xlabel="x [mm]", ylabel="y [mm]", title=title)
    return plot_ax


def rz(
    trace,
    *,
    ax=None,
    label: str | None = None,
    color: str | None = None,
    marker: str | None = ".",
    title: str | None = None,
) -> plt.Axes:
    """Longitudinal view: transverse radius versus z."""
    pos = _positions(trace)
    plot_ax = _get_ax(ax)
    plot_ax.plot(pos[:, 2], np.hypot(pos[:, 0], pos[:, 1]), label=label, color=color, marker=marker)
    if label:
        plot_ax.legend()
    _apply_labels(plot_ax, xlabel="z [mm]", ylabel="r [mm]", title=title)
    return plot_ax


def surface(
    ax: plt.Axes,
    target,
    *,
    extent: float = 1000.0,
    color: str | None = "0.4",
    ls: str = "--",
) -> plt.Axes:
    """
    Outline of ``target`` in the transverse view.

    Planes are drawn as a segment of half-length ``extent`` through their
    center; cylinders as their circle. Planes whose normal has no
    transverse component do not show up in this view and raise ValueError.
    """
    if isinstance(target, CylinderSurface):
        phi = np.linspace(0.0, 2.0 * math.pi, 361)
        ax.plot(
            target.center[0] + target.radius * np.cos(phi),
            target.center[1] + target.radius * np.sin(phi),
            color=color, ls=ls,
        )
        return ax
    if isinstance(target, PlaneSurface):
        nx, ny = float(target.normal[0]), float(target.normal[1])
        norm = math.hypot(nx, ny)
        if norm == 0.0:
            raise ValueError("plane normal is along z; it has no transverse outline")
        # in-plane transverse direction
        tx, ty = -ny / norm, nx / norm
        cx, cy = float(target.center[0]), float(target.center[1])
        ax.plot([cx - extent * tx, cx + extent * tx], [cy - extent * ty, cy + extent * ty],
                color=color, ls=ls)
        return ax
    raise TypeError(f"cannot draw surface of type {type(target).__name__}")
