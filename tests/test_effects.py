from __future__ import annotations

import pytest

from psyche.domain.effects import (
    AttributeEffect,
    CompoundEffect,
    QualityEffect,
    UnlockStoryletEffect,
    apply_effects,
)
from psyche.domain.entities import Character, CoreAttributes


@pytest.mark.parametrize("start", [0, 1, 50, 99, 100])
@pytest.mark.parametrize("delta", [-1_000, -101, -1, 0, 1, 37, 101, 1_000])
def test_attribute_effect_result_stays_in_range(start: int, delta: int) -> None:
    character = Character(attributes=CoreAttributes(Drive=start))

    AttributeEffect("Drive", delta).apply(character)

    assert 0 <= character.get_attribute("Drive") <= 100
    assert character.get_attribute("Drive") == max(0, min(100, start + delta))


def test_quality_effect_is_unclamped_and_defaults_to_zero() -> None:
    character = Character()

    QualityEffect("stress", -15).apply(character)

    assert character.get_quality("stress") == -15


@pytest.mark.parametrize(("a", "b"), [(3, 4), (-10, 2), (0, 0), (500, -800)])
def test_quality_effects_are_cumulative(a: int, b: int) -> None:
    stepwise = Character(qualities={"renown": 7})
    combined = Character(qualities={"renown": 7})

    QualityEffect("renown", a).apply(stepwise)
    QualityEffect("renown", b).apply(stepwise)
    QualityEffect("renown", a + b).apply(combined)

    assert stepwise.get_quality("renown") == combined.get_quality("renown")


def test_unlock_storylet_effect_is_idempotent() -> None:
    character = Character(played_storylet_ids={"intro"})
    effect = UnlockStoryletEffect("secret_door")

    effect.apply(character)
    after_first = set(character.played_storylet_ids)
    effect.apply(character)

    assert after_first == {"intro", "secret_door"}
    assert character.played_storylet_ids == after_first


def test_compound_effect_applies_children_in_order() -> None:
    character = Character(attributes=CoreAttributes(Bravery=95))
    effect = CompoundEffect(
        effects=(
            AttributeEffect("Bravery", 10),
            AttributeEffect("Bravery", -20),
            CompoundEffect(effects=(QualityEffect("stress", 2), QualityEffect("stress", 3))),
            UnlockStoryletEffect("aftermath"),
        )
    )

    effect.apply(character)

    # 95 + 10 clamps to 100 before the -20 is applied.
    assert character.get_attribute("Bravery") == 80
    assert character.get_quality("stress") == 5
    assert character.has_played("aftermath")


def test_empty_compound_effect_changes_nothing() -> None:
    character = Character()

    CompoundEffect().apply(character)

    assert character == Character()


def test_apply_effects_in_declared_order() -> None:
    character = Character(attributes=CoreAttributes(Ambition=0))

    apply_effects([AttributeEffect("Ambition", -5), AttributeEffect("Ambition", 5)], character)

    assert character.get_attribute("Ambition") == 5


def test_display_text() -> None:
    assert AttributeEffect("Bravery", 5).display_text() == "Bravery +5"
    assert AttributeEffect("Bravery", 0).display_text() == "Bravery +0"
    assert QualityEffect("stress", -3).display_text() == "stress -3"
    assert UnlockStoryletEffect("finale").display_text() == "Unlocks: finale"
    assert (
        CompoundEffect(effects=(QualityEffect("stress", 1), UnlockStoryletEffect("x"))).display_text()
        == "stress +1, Unlocks: x"
    )
    assert CompoundEffect().display_text() == "No effects"
