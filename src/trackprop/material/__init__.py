from .properties import Material, MaterialProperties, MaterialStep, VACUUM
from .binning import BinningAxis, BinUtility
from .record import LayerMaterialRecord, BinnedSurfaceMaterial

__all__ = [
    "Material", "MaterialProperties", "MaterialStep", "VACUUM",
    "BinningAxis", "BinUtility",
    "LayerMaterialRecord", "BinnedSurfaceMaterial",
]
