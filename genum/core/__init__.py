"""
Core components for genum.
"""
from .error_handling import (
    GenumError, DirectiveError, LoaderError, ExtractionError,
    GenerationError, WriteError, ConfigurationError
)
from .config import config

__all__ = [
    'GenumError',
    'DirectiveError',
    'LoaderError',
    'ExtractionError',
    'GenerationError',
    'WriteError',
    'ConfigurationError',
    'config',
]
