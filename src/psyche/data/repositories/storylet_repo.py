"""Directory-backed repository of storylet records, one .jsonc file each."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List

from psyche.data import paths
from psyche.data.codec import decode_storylet, encode_storylet
from psyche.data.errors import DataError, DataValidationError
from psyche.data.json_loader import load_jsonc, write_jsonc
from psyche.domain.defs import Storylet
from psyche.services.storylet_validator import validate_storylet

logger = logging.getLogger(__name__)

STORYLET_SUFFIX = ".jsonc"


@dataclass(frozen=True, slots=True)
class LoadFailure:
    """A storylet file that was skipped during a batch load."""

    path: Path
    message: str


class StoryletRepository:
    """Loads, caches and persists storylets.

    A bad file never aborts a batch load: it is logged, recorded in
    ``load_failures`` and skipped.
    """

    def __init__(self, base_path: Path | str | None = None) -> None:
        self._base_path = Path(base_path) if base_path is not None else None
        self._storylets: Dict[str, Storylet] | None = None
        self._files: Dict[str, Path] = {}
        self._load_failures: List[LoadFailure] = []

    @property
    def directory(self) -> Path:
        return paths.get_storylets_path(self._base_path)

    @property
    def load_failures(self) -> List[LoadFailure]:
        self._ensure_loaded()
        return list(self._load_failures)

    def _file_path(self, storylet_id: str) -> Path:
        if storylet_id in self._files:
            return self._files[storylet_id]
        return self.directory / f"{storylet_id}{STORYLET_SUFFIX}"

    def _ensure_loaded(self) -> None:
        if self._storylets is None:
            self._storylets = self._load_all()

    def _load_all(self) -> Dict[str, Storylet]:
        directory = self.directory
        self._load_failures = []
        self._files = {}
        storylets: Dict[str, Storylet] = {}
        if not directory.is_dir():
            logger.warning("Storylet directory %s does not exist; creating it", directory)
            directory.mkdir(parents=True, exist_ok=True)
            return storylets

        for file_path in sorted(directory.glob(f"*{STORYLET_SUFFIX}")):
            try:
                storylet = self._load_file(file_path)
            except DataError as exc:
                self._record_failure(file_path, str(exc))
                continue
            if storylet.id in storylets:
                self._record_failure(file_path, f"duplicate storylet id: {storylet.id}")
                continue
            storylets[storylet.id] = storylet
            self._files[storylet.id] = file_path

        logger.info("Loaded %d storylet(s) from %s", len(storylets), directory)
        return storylets

    def _load_file(self, file_path: Path) -> Storylet:
        storylet = decode_storylet(load_jsonc(file_path))
        validation = validate_storylet(storylet)
        if not validation.is_valid:
            raise DataValidationError(
                f"Invalid storylet in {file_path.name}: {', '.join(validation.errors)}"
            )
        return storylet

    def _record_failure(self, file_path: Path, message: str) -> None:
        logger.warning("Skipping storylet file %s: %s", file_path.name, message)
        self._load_failures.append(LoadFailure(path=file_path, message=message))

    def get(self, storylet_id: str) -> Storylet:
        """Return a storylet by id."""
        self._ensure_loaded()
        assert self._storylets is not None
        try:
            return self._storylets[storylet_id]
        except KeyError as exc:
            raise KeyError(storylet_id) from exc

    def find(self, storylet_id: str) -> Storylet | None:
        self._ensure_loaded()
        assert self._storylets is not None
        return self._storylets.get(storylet_id)

    def all(self) -> list[Storylet]:
        """Return all storylets sorted deterministically by id."""
        self._ensure_loaded()
        assert self._storylets is not None
        return [self._storylets[key] for key in sorted(self._storylets.keys())]

    def by_category(self, category: str) -> list[Storylet]:
        return [storylet for storylet in self.all() if storylet.category == category]

    def by_tags(self, *tags: str) -> list[Storylet]:
        """Return storylets carrying any of the given tags."""
        wanted = set(tags)
        return [storylet for storylet in self.all() if wanted.intersection(storylet.tags)]

    def save(self, storylet: Storylet) -> None:
        """Validate, cache and overwrite the storylet's file."""
        validation = validate_storylet(storylet)
        if not validation.is_valid:
            raise DataValidationError(
                f"Cannot save invalid storylet '{storylet.id}': {', '.join(validation.errors)}"
            )
        self._ensure_loaded()
        assert self._storylets is not None
        file_path = self._file_path(storylet.id)
        write_jsonc(file_path, encode_storylet(storylet))
        self._storylets[storylet.id] = storylet
        self._files[storylet.id] = file_path
        logger.info("Saved storylet %s", storylet.id)

    def delete(self, storylet_id: str) -> bool:
        """Remove a storylet; returns False when it was not loaded."""
        self._ensure_loaded()
        assert self._storylets is not None
        if storylet_id not in self._storylets:
            return False
        file_path = self._file_path(storylet_id)
        del self._storylets[storylet_id]
        self._files.pop(storylet_id, None)
        file_path.unlink(missing_ok=True)
        logger.info("Deleted storylet %s", storylet_id)
        return True

    def reload(self) -> None:
        self._storylets = None
        self._ensure_loaded()
