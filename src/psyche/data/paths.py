"""Helpers for resolving storylet file locations."""
from __future__ import annotations

import os
from pathlib import Path

STORYLETS_DIR_ENV = "PSYCHE_STORYLETS_DIR"


def get_repo_root() -> Path:
    """Return the repository root."""
    return Path(__file__).resolve().parents[3]


def get_storylets_path(base_path: Path | str | None = None) -> Path:
    """Return the directory containing storylet .jsonc files.

    An explicit base path wins, then the PSYCHE_STORYLETS_DIR environment
    variable, then the data/storylets directory of the source checkout.
    """
    if base_path is not None:
        return Path(base_path)
    env_path = os.environ.get(STORYLETS_DIR_ENV)
    if env_path:
        return Path(env_path)
    return get_repo_root() / "data" / "storylets"
