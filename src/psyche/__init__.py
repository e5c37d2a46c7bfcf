"""Rule engine for quality-based narrative: storylets, prerequisites and effects."""
from __future__ import annotations

from psyche.data.codec import decode_storylet, encode_storylet, loads_storylet, dumps_storylet
from psyche.data.errors import StoryletDecodeError
from psyche.domain.defs import Storylet, StoryletOption
from psyche.domain.entities import Character, CoreAttributes
from psyche.services.storylet_validator import validate_storylet

__version__ = "0.1.0"

__all__ = [
    "Character",
    "CoreAttributes",
    "Storylet",
    "StoryletDecodeError",
    "StoryletOption",
    "decode_storylet",
    "dumps_storylet",
    "encode_storylet",
    "loads_storylet",
    "validate_storylet",
]
