"""Shared CLI rendering helpers."""
from __future__ import annotations

import textwrap
from typing import Sequence

from psyche.data.repositories import LoadFailure
from psyche.domain.defs import Storylet
from psyche.services.storylet_validator import Issue, format_issue

_WRAP_WIDTH = 78


def render_heading(title: str) -> None:
    """Print a consistent section heading."""
    print(f"\n=== {title} ===")


def render_storylet_list(storylets: Sequence[Storylet]) -> None:
    if not storylets:
        print("(no storylets)")
        return
    for storylet in storylets:
        category = f" [{storylet.category}]" if storylet.category else ""
        print(f"{storylet.priority:>4}  {storylet.id}: {storylet.title}{category}")


def render_storylet(storylet: Storylet) -> None:
    """Print a storylet with the display text of its trees."""
    render_heading(storylet.title)
    print(f"id: {storylet.id}  priority: {storylet.priority}  category: {storylet.category or '-'}")
    if storylet.tags:
        print(f"tags: {', '.join(storylet.tags)}")
    for text in (storylet.description, storylet.content):
        if text:
            print()
            print(textwrap.fill(text, width=_WRAP_WIDTH))
    _render_lines("Requires", [item.display_text() for item in storylet.prerequisites])
    _render_lines("Effects", [item.display_text() for item in storylet.effects])
    for option in storylet.options:
        print(f"\n  > [{option.id}] {option.text} (priority {option.priority})")
        _render_lines("Requires", [item.display_text() for item in option.prerequisites], indent="    ")
        _render_lines("Effects", [item.display_text() for item in option.effects], indent="    ")


def _render_lines(label: str, lines: Sequence[str], *, indent: str = "") -> None:
    if not lines:
        return
    print(f"{indent}{label}:")
    for line in lines:
        print(f"{indent}- {line}")


def render_load_failures(failures: Sequence[LoadFailure]) -> None:
    for failure in failures:
        print(f" - {failure.path.name}: {failure.message}")


def render_issues(issues: Sequence[Issue]) -> None:
    for issue in issues:
        print(f" - {format_issue(issue)}")
