"""Domain definition exports."""

from .storylet_def import DEFAULT_PRIORITY, Storylet, StoryletOption

__all__ = [
    "DEFAULT_PRIORITY",
    "Storylet",
    "StoryletOption",
]
