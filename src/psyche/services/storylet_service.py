"""Storylet selection and choice application for the turn loop."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Sequence

from psyche.domain.defs import Storylet
from psyche.domain.effects import Effect, apply_effects
from psyche.domain.entities import Character
from psyche.services.errors import OptionUnavailableError

if TYPE_CHECKING:
    from psyche.data.repositories import StoryletRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PlayResult:
    """What happened when a storylet was played or an option chosen."""

    storylet_id: str
    option_id: str | None = None
    result_text: str = ""
    applied_effects: List[str] = field(default_factory=list)
    completed: bool = False


class StoryletService:
    """Application service that picks storylets and applies their consequences."""

    def __init__(self, *, storylet_repo: StoryletRepository) -> None:
        self._storylet_repo = storylet_repo

    def available_storylets(self, character: Character) -> List[Storylet]:
        """Return storylets whose prerequisites are met, highest priority first."""
        available = [
            storylet
            for storylet in self._storylet_repo.all()
            if storylet.prerequisites_met(character)
        ]
        return sorted(available, key=lambda storylet: storylet.priority, reverse=True)

    def next_storylet(self, character: Character) -> Storylet | None:
        available = self.available_storylets(character)
        return available[0] if available else None

    def play_storylet(self, storylet: Storylet, character: Character) -> PlayResult:
        """Apply storylet-level effects.

        Storylets without options are complete at this point and get marked as
        played; storylets with options wait for choose_option().
        """
        result = PlayResult(storylet_id=storylet.id, result_text=storylet.content)
        result.applied_effects = _apply(storylet.effects, character)
        if not storylet.has_choices:
            character.mark_played(storylet.id)
            result.completed = True
        logger.debug("Played storylet %s (completed=%s)", storylet.id, result.completed)
        return result

    def choose_option(
        self, storylet: Storylet, option_id: str, character: Character
    ) -> PlayResult:
        """Apply the chosen option's effects and mark the storylet played."""
        option = storylet.get_option(option_id)
        if option is None:
            raise OptionUnavailableError(
                f"Storylet '{storylet.id}' has no option '{option_id}'."
            )
        if not option.is_available(character):
            raise OptionUnavailableError(
                f"Option '{option_id}' of storylet '{storylet.id}' is not available."
            )
        result = PlayResult(
            storylet_id=storylet.id,
            option_id=option.id,
            result_text=option.result_text,
        )
        result.applied_effects = _apply(option.effects, character)
        character.mark_played(storylet.id)
        result.completed = True
        logger.debug("Chose option %s in storylet %s", option.id, storylet.id)
        return result


def _apply(effects: Sequence[Effect], character: Character) -> List[str]:
    apply_effects(effects, character)
    return [effect.display_text() for effect in effects]
