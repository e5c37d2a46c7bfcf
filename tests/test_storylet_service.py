from __future__ import annotations

from pathlib import Path

import pytest

from psyche.data.repositories import StoryletRepository
from psyche.domain.defs import Storylet, StoryletOption
from psyche.domain.effects import AttributeEffect, QualityEffect, UnlockStoryletEffect
from psyche.domain.entities import Character, CoreAttributes
from psyche.domain.prerequisites import AttributeRequirement, StoryletPlayedRequirement
from psyche.services import OptionUnavailableError, StoryletService


def _make_service(tmp_path: Path, *storylets: Storylet) -> StoryletService:
    repo = StoryletRepository(base_path=tmp_path)
    for storylet in storylets:
        repo.save(storylet)
    return StoryletService(storylet_repo=repo)


def _gate(storylet_id: str) -> StoryletPlayedRequirement:
    return StoryletPlayedRequirement(storylet_id, must_have_played=False)


def test_available_storylets_filtered_and_sorted(tmp_path: Path) -> None:
    service = _make_service(
        tmp_path,
        Storylet(id="low", title="Low", priority=1),
        Storylet(id="high", title="High", priority=50),
        Storylet(
            id="brave_only",
            title="Brave",
            priority=99,
            prerequisites=(AttributeRequirement("Bravery", min_value=80),),
        ),
    )

    available = service.available_storylets(Character())

    assert [storylet.id for storylet in available] == ["high", "low"]
    assert service.next_storylet(Character()).id == "high"


def test_next_storylet_none_when_nothing_available(tmp_path: Path) -> None:
    service = _make_service(tmp_path, Storylet(id="once", title="Once", prerequisites=(_gate("once"),)))
    character = Character(played_storylet_ids={"once"})

    assert service.next_storylet(character) is None


def test_legacy_storylet_applies_effects_and_completes(tmp_path: Path) -> None:
    storylet = Storylet(
        id="commute",
        title="Commute",
        content="The tram lurches.",
        prerequisites=(_gate("commute"),),
        effects=(QualityEffect("stress", 2), AttributeEffect("Drive", -3)),
    )
    service = _make_service(tmp_path, storylet)
    character = Character()

    result = service.play_storylet(storylet, character)

    assert result.completed is True
    assert result.result_text == "The tram lurches."
    assert result.applied_effects == ["stress +2", "Drive -3"]
    assert character.get_quality("stress") == 2
    assert character.get_attribute("Drive") == 47
    assert service.available_storylets(character) == []


def test_storylet_with_options_waits_for_choice(tmp_path: Path) -> None:
    storylet = Storylet(
        id="protest",
        title="Protest",
        effects=(QualityEffect("curiosity", 1),),
        options=(
            StoryletOption(
                id="march",
                text="March",
                result_text="You march.",
                prerequisites=(AttributeRequirement("Bravery", min_value=60),),
                effects=(AttributeEffect("Bravery", 5), UnlockStoryletEffect("marched")),
            ),
            StoryletOption(id="leave", text="Leave", effects=(AttributeEffect("Bravery", -2),)),
        ),
    )
    service = _make_service(tmp_path, storylet)
    character = Character(attributes=CoreAttributes(Bravery=65))

    played = service.play_storylet(storylet, character)
    assert played.completed is False
    assert not character.has_played("protest")

    chosen = service.choose_option(storylet, "march", character)

    assert chosen.option_id == "march"
    assert chosen.result_text == "You march."
    assert chosen.applied_effects == ["Bravery +5", "Unlocks: marched"]
    assert character.get_attribute("Bravery") == 70
    assert character.get_quality("curiosity") == 1
    assert character.has_played("protest")
    assert character.has_played("marched")


def test_choose_unavailable_option_raises(tmp_path: Path) -> None:
    storylet = Storylet(
        id="gate",
        title="Gate",
        options=(
            StoryletOption(
                id="force",
                text="Force it",
                prerequisites=(AttributeRequirement("Drive", min_value=90),),
            ),
        ),
    )
    service = _make_service(tmp_path, storylet)
    character = Character()

    with pytest.raises(OptionUnavailableError):
        service.choose_option(storylet, "force", character)
    with pytest.raises(OptionUnavailableError):
        service.choose_option(storylet, "missing", character)
    assert not character.has_played("gate")
