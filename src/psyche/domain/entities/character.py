"""Character state consumed by prerequisites and effects."""
from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Dict, Set

ATTRIBUTE_MIN = 0
ATTRIBUTE_MAX = 100

ATTRIBUTE_NAMES: tuple[str, ...] = (
    "SelfAssurance",
    "Compassion",
    "Ambition",
    "Drive",
    "Discernment",
    "Bravery",
)


def clamp_attribute(value: int) -> int:
    """Clamp a raw attribute value into the valid range."""
    return max(ATTRIBUTE_MIN, min(ATTRIBUTE_MAX, value))


@dataclass(slots=True)
class CoreAttributes:
    """The six personality scales, each bounded to 0-100."""

    SelfAssurance: int = 50
    Compassion: int = 50
    Ambition: int = 50
    Drive: int = 50
    Discernment: int = 50
    Bravery: int = 50

    def __post_init__(self) -> None:
        for attr in fields(self):
            setattr(self, attr.name, clamp_attribute(getattr(self, attr.name)))

    def get(self, name: str) -> int:
        if name not in ATTRIBUTE_NAMES:
            raise KeyError(name)
        return getattr(self, name)

    def set(self, name: str, value: int) -> None:
        if name not in ATTRIBUTE_NAMES:
            raise KeyError(name)
        setattr(self, name, clamp_attribute(value))

    def modify(self, name: str, delta: int) -> int:
        """Add delta to an attribute, clamp, and return the new value."""
        self.set(name, self.get(name) + delta)
        return self.get(name)

    def as_dict(self) -> Dict[str, int]:
        return {name: getattr(self, name) for name in ATTRIBUTE_NAMES}


@dataclass(slots=True)
class Character:
    """Mutable per-session player state.

    Qualities are free-form counters keyed by id and are never clamped.
    Storylet ids are recorded once played (or unlocked by an effect).
    """

    attributes: CoreAttributes = field(default_factory=CoreAttributes)
    qualities: Dict[str, int] = field(default_factory=dict)
    played_storylet_ids: Set[str] = field(default_factory=set)

    def get_attribute(self, name: str) -> int:
        return self.attributes.get(name)

    def set_attribute(self, name: str, value: int) -> None:
        self.attributes.set(name, value)

    def modify_attribute(self, name: str, delta: int) -> int:
        return self.attributes.modify(name, delta)

    def get_quality(self, quality_id: str) -> int:
        return self.qualities.get(quality_id, 0)

    def set_quality(self, quality_id: str, value: int) -> None:
        self.qualities[quality_id] = value

    def modify_quality(self, quality_id: str, delta: int) -> int:
        value = self.get_quality(quality_id) + delta
        self.qualities[quality_id] = value
        return value

    def has_played(self, storylet_id: str) -> bool:
        return storylet_id in self.played_storylet_ids

    def mark_played(self, storylet_id: str) -> None:
        self.played_storylet_ids.add(storylet_id)
