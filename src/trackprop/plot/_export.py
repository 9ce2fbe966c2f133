# src/trackprop/plot/_export.py
from __future__ import annotations
from pathlib import Path
import matplotlib.pyplot as plt

def _as_fig(obj) -> plt.Figure:
    if hasattr(obj, "figure") and obj.figure is not None:
        return obj.figure  # Axes -> Figure
    return obj  # assume Figure

def savefig(
    fig_or_ax,
    path: str | Path,
    *,
    fmts: tuple[str, ...] | None = None,
    dpi: int = 300,
    transparent: bool = False,
    bbox_inches: str | None = "tight",
) -> list[Path]:
    """
    Save a figure (or ``axes.figure``) and return the written paths in order.

    With an extension in ``path`` that format is written; otherwise one
    file ``<path>.<fmt>`` per entry of ``fmts`` (default png). Giving both
    is ambiguous and raises ValueError.
    """
    fig = _as_fig(fig_or_ax)
    target = Path(path)
    if target.suffix:
        if fmts is not None:
            raise ValueError("Give either a path extension or fmts, not both.")
        fmts = (target.suffix,)
        target = target.with_suffix("")
    elif fmts is None:
        fmts = ("png",)

    # normalize fmts: lower, dedupe while preserving order
    norm_fmts: list[str] = []
    for f in fmts:
        f2 = str(f).lower().lstrip(".")
        if f2 and f2 not in norm_fmts:
            norm_fmts.append(f2)
    if not norm_fmts:
        raise ValueError("fmts must contain at least one non-empty format.")

    target.parent.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    for fmt in norm_fmts:
        outfile = target.with_suffix(f".{fmt}")
        fig.savefig(outfile, dpi=dpi, transparent=transparent, bbox_inches=bbox_inches)
        written.append(outfile)
    return written

def show() -> None:
    plt.show()

__all__ = ["savefig", "show"]
