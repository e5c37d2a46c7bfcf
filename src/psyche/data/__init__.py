"""Data layer utilities for loading and persisting storylets."""

from .errors import DataError, DataLoadError, DataValidationError, StoryletDecodeError
from .paths import get_repo_root, get_storylets_path

__all__ = [
    "DataError",
    "DataLoadError",
    "DataValidationError",
    "StoryletDecodeError",
    "get_repo_root",
    "get_storylets_path",
]
