"""Data layer utilities for loading JSON definitions."""

from .errors import DataLoadError, DataValidationError
from .paths import get_definitions_path

__all__ = [
    "DataLoadError",
    "DataValidationError",
    "get_definitions_path",
]
