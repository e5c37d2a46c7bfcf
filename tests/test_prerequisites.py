from __future__ import annotations

import pytest

from psyche.domain.entities import Character, CoreAttributes
from psyche.domain.prerequisites import (
    AttributeRequirement,
    CompoundPrerequisite,
    QualityRequirement,
    StoryletPlayedRequirement,
    all_met,
)


def _character(bravery: int = 50, discernment: int = 50, **qualities: int) -> Character:
    return Character(
        attributes=CoreAttributes(Bravery=bravery, Discernment=discernment),
        qualities=dict(qualities),
    )


@pytest.mark.parametrize(
    ("value", "expected"),
    [(39, False), (40, True), (55, True), (70, True), (71, False)],
)
def test_attribute_requirement_bounds_are_inclusive(value: int, expected: bool) -> None:
    requirement = AttributeRequirement("Bravery", min_value=40, max_value=70)

    assert requirement.is_met(_character(bravery=value)) is expected


def test_attribute_requirement_without_bounds_is_always_met() -> None:
    requirement = AttributeRequirement("Bravery")

    assert requirement.is_met(_character(bravery=0))
    assert requirement.is_met(_character(bravery=100))


def test_quality_requirement_reads_missing_quality_as_zero() -> None:
    character = _character()

    assert QualityRequirement("stress", max_value=0).is_met(character)
    assert not QualityRequirement("stress", min_value=1).is_met(character)
    assert QualityRequirement("stress", min_value=-5, max_value=5).is_met(character)


def test_quality_requirement_handles_negative_values() -> None:
    character = _character(stress=-12)

    assert QualityRequirement("stress", max_value=-10).is_met(character)
    assert not QualityRequirement("stress", min_value=-11).is_met(character)


def test_storylet_played_requirement_and_negation() -> None:
    character = _character()
    played = StoryletPlayedRequirement("intro", must_have_played=True)
    not_played = StoryletPlayedRequirement("intro", must_have_played=False)

    assert not played.is_met(character)
    assert not_played.is_met(character)
    character.mark_played("intro")
    assert played.is_met(character)
    assert not not_played.is_met(character)


def test_storylet_played_requirement_for_unknown_id_is_not_an_error() -> None:
    requirement = StoryletPlayedRequirement("does_not_exist")

    assert requirement.is_met(_character()) is False


@pytest.mark.parametrize("logic", ["AND", "OR"])
def test_empty_compound_is_vacuously_met(logic: str) -> None:
    # OR over no alternatives is also met; there is nothing to satisfy.
    assert CompoundPrerequisite(logic=logic).is_met(_character()) is True


def test_nested_compound_bravery_or_discernment_and_social_capital() -> None:
    tree = CompoundPrerequisite(
        logic="AND",
        prerequisites=(
            CompoundPrerequisite(
                logic="OR",
                prerequisites=(
                    AttributeRequirement("Bravery", min_value=60),
                    AttributeRequirement("Discernment", min_value=70),
                ),
            ),
            QualityRequirement("socialCapital", min_value=5),
        ),
    )

    assert tree.is_met(_character(bravery=65, discernment=50, socialCapital=10))
    assert not tree.is_met(_character(bravery=55, discernment=50, socialCapital=10))
    assert tree.is_met(_character(bravery=55, discernment=75, socialCapital=10))
    assert not tree.is_met(_character(bravery=65, discernment=50, socialCapital=4))


def test_deeply_nested_compound_evaluates() -> None:
    tree = AttributeRequirement("Bravery", min_value=10)
    for depth in range(200):
        tree = CompoundPrerequisite(logic="OR" if depth % 2 else "AND", prerequisites=(tree,))

    assert tree.is_met(_character(bravery=20))
    assert not tree.is_met(_character(bravery=5))


def test_all_met_requires_every_item() -> None:
    character = _character(bravery=65)
    prerequisites = [
        AttributeRequirement("Bravery", min_value=60),
        QualityRequirement("stress", max_value=0),
    ]

    assert all_met(prerequisites, character)
    assert all_met([], character)
    character.modify_quality("stress", 1)
    assert not all_met(prerequisites, character)


def test_display_text() -> None:
    assert AttributeRequirement("Bravery", min_value=60).display_text() == "Bravery ≥ 60"
    assert AttributeRequirement("Bravery", max_value=40).display_text() == "Bravery ≤ 40"
    assert (
        AttributeRequirement("Bravery", min_value=20, max_value=80).display_text()
        == "Bravery between 20-80"
    )
    assert QualityRequirement("stress").display_text() == "stress (any value)"
    assert StoryletPlayedRequirement("intro").display_text() == "Requires: intro played"
    assert (
        StoryletPlayedRequirement("intro", must_have_played=False).display_text()
        == "Requires: intro not played"
    )
    compound = CompoundPrerequisite(
        logic="OR",
        prerequisites=(
            AttributeRequirement("Bravery", min_value=60),
            QualityRequirement("stress", max_value=3),
        ),
    )
    assert compound.display_text() == "(Bravery ≥ 60 OR stress ≤ 3)"
    assert CompoundPrerequisite().display_text() == "No requirements"
