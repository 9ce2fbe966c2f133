# src/trackprop/material/record.py
"""
Binned material accumulation for one layer.

Material steps collected at a position are first collapsed into one
thickness-weighted sample, then summed into the bin of that position.
``average_material`` turns the sums into per-bin averages:
  x0, l0 weighted by thickness; A, Z weighted by thickness * density;
  rho averaged over thickness; thickness averaged over entries.
"""
from __future__ import annotations

from typing import List, Sequence
import numpy as np

from trackprop.material.binning import BinUtility
from trackprop.material.properties import Material, MaterialProperties, MaterialStep, VACUUM

__all__ = ["LayerMaterialRecord", "BinnedSurfaceMaterial"]


class BinnedSurfaceMaterial:
    """Averaged material per bin; matrix is indexed [bin1][bin0]."""

    def __init__(self, bin_utility: BinUtility, matrix: List[List[MaterialProperties]]):
        self.bin_utility = bin_utility
        self.matrix = matrix

    def material(self, bin0: int, bin1: int = 0) -> MaterialProperties:
        return self.matrix[bin1][bin0]

    def material_at(self, position) -> MaterialProperties:
        return self.material(self.bin_utility.bin(position, 0), self.bin_utility.bin(position, 1))


class LayerMaterialRecord:

    def __init__(self, bin_utility: BinUtility):
        self.bin_utility = bin_utility
        shape = bin_utility.shape
        self.thickness = np.zeros(shape)
        self.rho = np.zeros(shape)
        self.x0 = np.zeros(shape)
        self.l0 = np.zeros(shape)
        self.a = np.zeros(shape)
        self.z = np.zeros(shape)
        self.entries = np.zeros(shape, dtype=np.int64)
        self._averaged = False

    def copy(self) -> "LayerMaterialRecord":
        other = LayerMaterialRecord(self.bin_utility)
        for name in ("thickness", "rho", "x0", "l0", "a", "z", "entries"):
            setattr(other, name, getattr(self, name).copy())
        other._averaged = self._averaged
        return other

    def add_layer_material_properties(self, position, steps: Sequence[MaterialStep]) -> None:
        """Collapse ``steps`` into one sample and add it to the bin of ``position``."""
        if self._averaged:
            raise RuntimeError("cannot add material after average_material() was called")

        new_t = new_rho = new_x0 = new_l0 = new_a = new_z = 0.0
        for step in steps:
            t = step.properties.thickness
            mat = step.properties.material
            new_t += t
            new_rho += mat.rho * t
            if t != 0.0:
                new_x0 += mat.x0 * t
                new_l0 += mat.l0 * t
            new_a += mat.a * mat.rho * t
            new_z += mat.z * mat.rho * t

        if new_rho != 0.0:
            new_a /= new_rho
            new_z /= new_rho
        if new_t != 0.0:
            new_x0 /= new_t
            new_l0 /= new_t
            new_rho /= new_t

        b0 = self.bin_utility.bin(position, 0)
        b1 = self.bin_utility.bin(position, 1)
        self.thickness[b1, b0] += new_t
        self.rho[b1, b0] += new_rho * new_t
        self.x0[b1, b0] += new_x0 * new_t
        self.l0[b1, b0] += new_l0 * new_t
        self.a[b1, b0] += new_a * new_rho * new_t
        self.z[b1, b0] += new_z * new_rho * new_t
        self.entries[b1, b0] += 1

    def average_material(self) -> None:
        """Turn the accumulated sums into averages. Calling it again is a no-op."""
        if self._averaged:
            return
        t = self.thickness
        with np.errstate(divide="ignore", invalid="ignore"):
            self.x0 = np.where(t != 0.0, self.x0 / t, self.x0)
            self.l0 = np.where(t != 0.0, self.l0 / t, self.l0)
            self.a = np.where(self.rho != 0.0, self.a / self.rho, self.a)
            self.z = np.where(self.rho != 0.0, self.z / self.rho, self.z)
            self.rho = np.where(t != 0.0, self.rho / t, self.rho)
            self.thickness = np.where(self.entries != 0, t / np.maximum(self.entries, 1), t)
        self._averaged = True

    def layer_material(self) -> BinnedSurfaceMaterial:
        """Per-bin MaterialProperties; empty bins carry vacuum with zero thickness."""
        rows, cols = self.bin_utility.shape
        matrix: List[List[MaterialProperties]] = []
        for b1 in range(rows):
            row = []
            for b0 in range(cols):
                if self.thickness[b1, b0] == 0.0 or self.x0[b1, b0] == 0.0:
                    row.append(MaterialProperties(VACUUM, 0.0, int(self.entries[b1, b0])))
                    continue
                mat = Material(
                    x0=float(self.x0[b1, b0]),
                    l0=float(self.l0[b1, b0]),
                    a=float(self.a[b1, b0]),
                    z=float(self.z[b1, b0]),
                    rho=float(self.rho[b1, b0]),
                )
                row.append(MaterialProperties(mat, float(self.thickness[b1, b0]), int(self.entries[b1, b0])))
            matrix.append(row)
        return BinnedSurfaceMaterial(self.bin_utility, matrix)
