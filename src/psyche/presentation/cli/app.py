"""Command-line entry point for inspecting and validating storylet content."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from psyche.data.repositories import StoryletRepository
from psyche.services.storylet_validator import validate_storylets

from .render import (
    render_heading,
    render_issues,
    render_load_failures,
    render_storylet,
    render_storylet_list,
)


def parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="psyche", description="Inspect Psyche storylet content.")
    parser.add_argument(
        "--data-dir",
        default=None,
        help="Directory of .jsonc storylet files (defaults to PSYCHE_STORYLETS_DIR or data/storylets).",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("validate", help="Load every storylet and report problems.")
    subparsers.add_parser("list", help="List storylets by priority.")
    show = subparsers.add_parser("show", help="Show a single storylet.")
    show.add_argument("storylet_id")
    return parser.parse_args(argv)


def _validate(repo: StoryletRepository) -> int:
    storylets = repo.all()
    failures = repo.load_failures
    result = validate_storylets(storylets)
    if failures:
        render_heading("Load failures")
        render_load_failures(failures)
    if result.issues:
        render_heading("Validation issues")
        render_issues(result.issues)
    if failures or not result.is_valid:
        print(f"\nValidation failed for {repo.directory}.")
        return 1
    print(f"Validation passed for {repo.directory} ({len(storylets)} storylet(s)).")
    return 0


def _list(repo: StoryletRepository) -> int:
    storylets = sorted(repo.all(), key=lambda storylet: storylet.priority, reverse=True)
    render_storylet_list(storylets)
    return 0


def _show(repo: StoryletRepository, storylet_id: str) -> int:
    storylet = repo.find(storylet_id)
    if storylet is None:
        print(f"Unknown storylet: {storylet_id}")
        return 1
    render_storylet(storylet)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")
    repo = StoryletRepository(base_path=args.data_dir)
    if args.command == "validate":
        return _validate(repo)
    if args.command == "list":
        return _list(repo)
    return _show(repo, args.storylet_id)
