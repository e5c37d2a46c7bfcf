"""Service layer exports."""

from .errors import OptionUnavailableError
from .storylet_service import PlayResult, StoryletService
from .storylet_validator import (
    Issue,
    StoryletValidationResult,
    format_issue,
    validate_storylet,
    validate_storylets,
)

__all__ = [
    "Issue",
    "OptionUnavailableError",
    "PlayResult",
    "StoryletService",
    "StoryletValidationResult",
    "format_issue",
    "validate_storylet",
    "validate_storylets",
]
