"""Storylet and option records used by the runtime."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List

from psyche.domain.effects import Effect
from psyche.domain.entities import Character
from psyche.domain.prerequisites import Prerequisite, all_met

DEFAULT_PRIORITY = 10


@dataclass(frozen=True, slots=True)
class StoryletOption:
    """A branching choice inside a storylet with its own gating and consequences."""

    id: str
    text: str
    description: str = ""
    result_text: str = ""
    prerequisites: tuple[Prerequisite, ...] = ()
    effects: tuple[Effect, ...] = ()
    priority: int = DEFAULT_PRIORITY
    tags: tuple[str, ...] = ()

    def is_available(self, character: Character) -> bool:
        return all_met(self.prerequisites, character)


@dataclass(frozen=True, slots=True)
class Storylet:
    """Fully decoded storylet.

    Storylets without options use legacy semantics: their own effects apply
    automatically and there is no branching.
    """

    id: str
    title: str
    description: str = ""
    content: str = ""
    prerequisites: tuple[Prerequisite, ...] = ()
    effects: tuple[Effect, ...] = ()
    options: tuple[StoryletOption, ...] = ()
    priority: int = DEFAULT_PRIORITY
    category: str = ""
    tags: tuple[str, ...] = ()

    @property
    def has_choices(self) -> bool:
        return bool(self.options)

    def prerequisites_met(self, character: Character) -> bool:
        return all_met(self.prerequisites, character)

    def get_available_options(self, character: Character) -> List[StoryletOption]:
        """Return options whose prerequisites are met, highest priority first.

        Ties keep declaration order (sorted() is stable).
        """
        available = [option for option in self.options if option.is_available(character)]
        return sorted(available, key=lambda option: option.priority, reverse=True)

    def get_option(self, option_id: str) -> StoryletOption | None:
        for option in self.options:
            if option.id == option_id:
                return option
        return None
