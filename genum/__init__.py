from .models.enums import CaseHandling
from .models.generation import Directive, Enum, EnumValue, GenerationUnit
from .core.error_handling import GenumError
from .core.loader import Environment
from .main import Genum

__version__ = "0.1.0"
__all__ = [
    "CaseHandling",
    "Directive",
    "Enum",
    "EnumValue",
    "Environment",
    "GenerationUnit",
    "Genum",
    "GenumError",
]
