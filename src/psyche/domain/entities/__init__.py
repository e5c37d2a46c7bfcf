"""Entity exports."""

from .character import ATTRIBUTE_MAX, ATTRIBUTE_MIN, ATTRIBUTE_NAMES, Character, CoreAttributes

__all__ = [
    "ATTRIBUTE_MAX",
    "ATTRIBUTE_MIN",
    "ATTRIBUTE_NAMES",
    "Character",
    "CoreAttributes",
]
