"""Low-level JSONC helpers for repositories."""
from __future__ import annotations

import json
from pathlib import Path

from . import jsonc
from .errors import DataLoadError


def load_jsonc(path: Path) -> object:
    """Load JSONC from disk and raise DataLoadError on failure."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise DataLoadError(f"Storylet file not found: {path}") from exc
    except OSError as exc:
        raise DataLoadError(f"Unable to read storylet file: {path}") from exc
    except UnicodeDecodeError as exc:
        raise DataLoadError(f"Storylet file is not valid UTF-8: {path}") from exc

    try:
        return jsonc.loads(text)
    except json.JSONDecodeError as exc:
        raise DataLoadError(f"Invalid JSONC in {path}: {exc}") from exc
    except RecursionError as exc:
        raise DataLoadError(f"Invalid JSONC in {path}: nesting too deep") from exc


def write_jsonc(path: Path, payload: object) -> None:
    """Overwrite a file with the serialized payload."""
    path.parent.mkdir(parents=True, exist_ok=True)
    try:
        path.write_text(jsonc.dumps(payload), encoding="utf-8")
    except OSError as exc:
        raise DataLoadError(f"Unable to write storylet file: {path}") from exc
