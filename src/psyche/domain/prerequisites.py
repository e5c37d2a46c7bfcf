"""Prerequisite tree: pure predicates over a character's state."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Union

from psyche.core.types import CompoundLogic
from psyche.domain.entities import Character


def _within_bounds(value: int, min_value: int | None, max_value: int | None) -> bool:
    if min_value is not None and value < min_value:
        return False
    if max_value is not None and value > max_value:
        return False
    return True


def _bounds_text(subject: str, min_value: int | None, max_value: int | None) -> str:
    if min_value is not None and max_value is not None:
        return f"{subject} between {min_value}-{max_value}"
    if min_value is not None:
        return f"{subject} ≥ {min_value}"
    if max_value is not None:
        return f"{subject} ≤ {max_value}"
    return f"{subject} (any value)"


@dataclass(frozen=True, slots=True)
class AttributeRequirement:
    """Inclusive bounds check on a core attribute."""

    attribute_name: str
    min_value: int | None = None
    max_value: int | None = None

    def is_met(self, character: Character) -> bool:
        value = character.get_attribute(self.attribute_name)
        return _within_bounds(value, self.min_value, self.max_value)

    def display_text(self) -> str:
        return _bounds_text(self.attribute_name, self.min_value, self.max_value)


@dataclass(frozen=True, slots=True)
class QualityRequirement:
    """Inclusive bounds check on a quality; a missing quality reads as 0."""

    quality_id: str
    min_value: int | None = None
    max_value: int | None = None

    def is_met(self, character: Character) -> bool:
        value = character.get_quality(self.quality_id)
        return _within_bounds(value, self.min_value, self.max_value)

    def display_text(self) -> str:
        return _bounds_text(self.quality_id, self.min_value, self.max_value)


@dataclass(frozen=True, slots=True)
class StoryletPlayedRequirement:
    storylet_id: str
    must_have_played: bool = True

    def is_met(self, character: Character) -> bool:
        return character.has_played(self.storylet_id) == self.must_have_played

    def display_text(self) -> str:
        if self.must_have_played:
            return f"Requires: {self.storylet_id} played"
        return f"Requires: {self.storylet_id} not played"


@dataclass(frozen=True, slots=True)
class CompoundPrerequisite:
    """AND/OR combinator over nested prerequisites.

    An empty child list is met for both logics.
    """

    logic: CompoundLogic = "AND"
    prerequisites: tuple[Prerequisite, ...] = ()

    def is_met(self, character: Character) -> bool:
        if not self.prerequisites:
            return True
        if self.logic == "OR":
            return any(child.is_met(character) for child in self.prerequisites)
        return all(child.is_met(character) for child in self.prerequisites)

    def display_text(self) -> str:
        if not self.prerequisites:
            return "No requirements"
        separator = f" {self.logic} "
        return "(" + separator.join(child.display_text() for child in self.prerequisites) + ")"


Prerequisite = Union[
    AttributeRequirement,
    QualityRequirement,
    StoryletPlayedRequirement,
    CompoundPrerequisite,
]


def all_met(prerequisites: Iterable[Prerequisite], character: Character) -> bool:
    """Return True when every prerequisite in the list is met."""
    return all(prerequisite.is_met(character) for prerequisite in prerequisites)


__all__ = [
    "AttributeRequirement",
    "CompoundPrerequisite",
    "Prerequisite",
    "QualityRequirement",
    "StoryletPlayedRequirement",
    "all_met",
]
