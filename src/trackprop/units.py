# src/trackprop/units.py
"""
Internal unit system.

Base units: mm (length), GeV (energy/momentum), e (charge), ns (time).
Magnetic field is stored in GeV/(e*mm) so the Lorentz force needs no
conversion factor inside the steppers: dT/ds = (q/p) * (T x B).
"""
from __future__ import annotations

import re

__all__ = [
    "mm", "um", "nm", "cm", "m", "km",
    "GeV", "MeV", "keV", "TeV",
    "e", "ns", "s",
    "T", "kGauss", "Gauss",
    "g", "kg", "mol", "g_per_cm3",
    "parse_quantity",
]

# length
mm = 1.0
um = 1e-3 * mm
nm = 1e-6 * mm
cm = 10.0 * mm
m = 1e3 * mm
km = 1e6 * mm

# energy / momentum
GeV = 1.0
MeV = 1e-3 * GeV
keV = 1e-6 * GeV
TeV = 1e3 * GeV

# charge, time
e = 1.0
ns = 1.0
s = 1e9 * ns

# magnetic field: c = 0.299792458 m/ns -> 1 T = 0.299792458 GeV/(e*m)
T = 0.000299792458 * GeV / (e * mm)
kGauss = 0.1 * T
Gauss = 1e-4 * T

# mass density (only ratios matter for material averaging)
g = 1.0
kg = 1e3 * g
mol = 1.0
g_per_cm3 = g / (cm * cm * cm)


_UNITS = {
    "mm": mm, "um": um, "nm": nm, "cm": cm, "m": m, "km": km,
    "GeV": GeV, "MeV": MeV, "keV": keV, "TeV": TeV,
    "e": e, "ns": ns, "s": s,
    "T": T, "kGauss": kGauss, "Gauss": Gauss,
}

_QUANTITY_RE = re.compile(r"^\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?|[-+]?inf)\s*\*?\s*([A-Za-z]*)\s*$")


def parse_quantity(value: str | float | int) -> float:
    """
    Convert ``"10 mm"``, ``"1.5*T"`` or a bare number into internal units.

    Bare numbers are taken to be in base units already.
    Raises ValueError for unknown units or malformed text.
    """
    if isinstance(value, bool):
        raise ValueError(f"expected a quantity, got boolean {value!r}")
    if isinstance(value, (int, float)):
        return float(value)
    match = _QUANTITY_RE.match(str(value))
    if match is None:
        raise ValueError(f"cannot parse quantity {value!r}")
    number, unit = match.groups()
    if not unit:
        return float(number)
    if unit not in _UNITS:
        raise ValueError(f"unknown unit '{unit}' in {value!r}; known units: {sorted(_UNITS)}")
    return float(number) * _UNITS[unit]
