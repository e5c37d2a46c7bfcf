"""Structural validation for storylet records.

Validation runs once, when a storylet is loaded or explicitly saved. Every
rule is checked and every violation collected; nothing here raises.
"""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Sequence

from psyche.core.types import Severity
from psyche.domain.defs import Storylet
from psyche.domain.effects import CompoundEffect, Effect, UnlockStoryletEffect
from psyche.domain.prerequisites import CompoundPrerequisite, Prerequisite, StoryletPlayedRequirement


@dataclass(frozen=True, slots=True)
class Issue:
    severity: Severity
    code: str
    message: str
    context: dict[str, str]


@dataclass(slots=True)
class StoryletValidationResult:
    """Outcome of validating one or more storylets."""

    issues: List[Issue] = field(default_factory=list)

    @property
    def errors(self) -> List[str]:
        return [issue.message for issue in self.issues if issue.severity == "ERROR"]

    @property
    def warnings(self) -> List[str]:
        return [issue.message for issue in self.issues if issue.severity == "WARN"]

    @property
    def is_valid(self) -> bool:
        return not self.errors


def format_issue(issue: Issue) -> str:
    context = " ".join(f"{key}={value}" for key, value in issue.context.items())
    suffix = f" ({context})" if context else ""
    return f"[{issue.severity}] {issue.code}: {issue.message}{suffix}"


def validate_storylet(storylet: Storylet) -> StoryletValidationResult:
    """Check the per-record invariants of a single storylet."""
    result = StoryletValidationResult()
    _check_storylet(storylet, result.issues)
    return result


def validate_storylets(storylets: Sequence[Storylet]) -> StoryletValidationResult:
    """Validate a whole storylet set, including cross-record references."""
    result = StoryletValidationResult()
    for storylet in storylets:
        _check_storylet(storylet, result.issues)

    id_counts = Counter(storylet.id for storylet in storylets if storylet.id)
    for storylet_id, count in id_counts.items():
        if count > 1:
            result.issues.append(
                Issue(
                    severity="ERROR",
                    code="DUPLICATE_STORYLET_ID",
                    message=f"duplicate storylet id: {storylet_id}",
                    context={"storylet_id": storylet_id},
                )
            )

    known_ids = set(id_counts)
    for storylet in storylets:
        for field_path, referenced_id in _storylet_references(storylet):
            if referenced_id in known_ids:
                continue
            result.issues.append(
                Issue(
                    severity="WARN",
                    code="UNKNOWN_STORYLET_REF",
                    message=f"reference to unknown storylet: {referenced_id}",
                    context={
                        "storylet_id": storylet.id,
                        "field_path": field_path,
                        "referenced_id": referenced_id,
                    },
                )
            )
    return result


def _check_storylet(storylet: Storylet, issues: List[Issue]) -> None:
    storylet_ctx = {"storylet_id": storylet.id}
    if not storylet.id.strip():
        issues.append(
            Issue(
                severity="ERROR",
                code="EMPTY_STORYLET_ID",
                message="storylet id cannot be empty",
                context={},
            )
        )
    if not storylet.title.strip():
        issues.append(
            Issue(
                severity="ERROR",
                code="EMPTY_STORYLET_TITLE",
                message="storylet title cannot be empty",
                context=storylet_ctx,
            )
        )

    for index, option in enumerate(storylet.options):
        option_ctx = {**storylet_ctx, "field_path": f"options[{index}]"}
        if not option.id.strip():
            issues.append(
                Issue(
                    severity="ERROR",
                    code="EMPTY_OPTION_ID",
                    message=f"option {index} has empty id",
                    context=option_ctx,
                )
            )
        if not option.text.strip():
            issues.append(
                Issue(
                    severity="ERROR",
                    code="EMPTY_OPTION_TEXT",
                    message=f"option {index} ({option.id}) has empty text",
                    context=option_ctx,
                )
            )

    option_counts = Counter(option.id for option in storylet.options if option.id.strip())
    for option_id, count in option_counts.items():
        if count > 1:
            issues.append(
                Issue(
                    severity="ERROR",
                    code="DUPLICATE_OPTION_ID",
                    message=f"duplicate option id: {option_id}",
                    context={**storylet_ctx, "option_id": option_id},
                )
            )


def _storylet_references(storylet: Storylet) -> Iterator[tuple[str, str]]:
    yield from _prerequisite_references(storylet.prerequisites, "prerequisites")
    yield from _effect_references(storylet.effects, "effects")
    for index, option in enumerate(storylet.options):
        yield from _prerequisite_references(option.prerequisites, f"options[{index}].prerequisites")
        yield from _effect_references(option.effects, f"options[{index}].effects")


def _prerequisite_references(
    prerequisites: Iterable[Prerequisite], path: str
) -> Iterator[tuple[str, str]]:
    for index, prerequisite in enumerate(prerequisites):
        item_path = f"{path}[{index}]"
        if isinstance(prerequisite, StoryletPlayedRequirement):
            yield item_path, prerequisite.storylet_id
        elif isinstance(prerequisite, CompoundPrerequisite):
            yield from _prerequisite_references(
                prerequisite.prerequisites, f"{item_path}.prerequisites"
            )


def _effect_references(effects: Iterable[Effect], path: str) -> Iterator[tuple[str, str]]:
    for index, effect in enumerate(effects):
        item_path = f"{path}[{index}]"
        if isinstance(effect, UnlockStoryletEffect):
            yield item_path, effect.storylet_id
        elif isinstance(effect, CompoundEffect):
            yield from _effect_references(effect.effects, f"{item_path}.effects")
