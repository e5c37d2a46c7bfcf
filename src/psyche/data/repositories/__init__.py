"""Repository exports."""

from .storylet_repo import LoadFailure, StoryletRepository

__all__ = [
    "LoadFailure",
    "StoryletRepository",
]
