"""Effect tree: state mutations applied to a character in declared order."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Union

from psyche.domain.entities import Character


def _signed(delta: int) -> str:
    return f"+{delta}" if delta >= 0 else str(delta)


@dataclass(frozen=True, slots=True)
class AttributeEffect:
    """Adds delta to an attribute; the character clamps the result to 0-100."""

    attribute_name: str
    delta: int

    def apply(self, character: Character) -> None:
        character.modify_attribute(self.attribute_name, self.delta)

    def display_text(self) -> str:
        return f"{self.attribute_name} {_signed(self.delta)}"


@dataclass(frozen=True, slots=True)
class QualityEffect:
    """Adds delta to a quality (default 0). Unclamped."""

    quality_id: str
    delta: int

    def apply(self, character: Character) -> None:
        character.modify_quality(self.quality_id, self.delta)

    def display_text(self) -> str:
        return f"{self.quality_id} {_signed(self.delta)}"


@dataclass(frozen=True, slots=True)
class UnlockStoryletEffect:
    storylet_id: str

    def apply(self, character: Character) -> None:
        character.mark_played(self.storylet_id)

    def display_text(self) -> str:
        return f"Unlocks: {self.storylet_id}"


@dataclass(frozen=True, slots=True)
class CompoundEffect:
    effects: tuple[Effect, ...] = ()

    def apply(self, character: Character) -> None:
        for effect in self.effects:
            effect.apply(character)

    def display_text(self) -> str:
        if not self.effects:
            return "No effects"
        return ", ".join(effect.display_text() for effect in self.effects)


Effect = Union[AttributeEffect, QualityEffect, UnlockStoryletEffect, CompoundEffect]


def apply_effects(effects: Iterable[Effect], character: Character) -> None:
    """Apply effects strictly in sequence."""
    for effect in effects:
        effect.apply(character)


__all__ = [
    "AttributeEffect",
    "CompoundEffect",
    "Effect",
    "QualityEffect",
    "UnlockStoryletEffect",
    "apply_effects",
]
