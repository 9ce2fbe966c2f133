from .stepping_logger import StepTrace, SteppingLogger
from .material_interactor import MaterialInteraction, MaterialInteractor, highland_theta0, MUON_MASS

__all__ = [
    "StepTrace", "SteppingLogger",
    "MaterialInteraction", "MaterialInteractor", "highland_theta0", "MUON_MASS",
]
