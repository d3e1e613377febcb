"""File-backed exclusion registry.

The registry is a flat list persisted as::

    {"excludedGames": [{"gameName", "appId", "reason", "excludedAt"}, ...],
     "lastUpdated": "<iso timestamp>"}

Every write replaces the whole snapshot; concurrent writers simply overwrite
each other (last writer wins).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

from ..core.exclusions import ExclusionEntry, ExclusionList
from ..exceptions import ExclusionStoreError, ValidationError
from .file_io import read_data_file, write_data_file_atomic

logger = logging.getLogger(__name__)

DEFAULT_EXCLUSIONS_FILE = "excludedGames.json"


@dataclass(frozen=True)
class ExclusionOperationResult:
    success: bool
    message: str


class ExclusionStore:
    """Loads and saves exclusion snapshots from one file."""

    def __init__(self, file_path: Optional[Union[str, Path]] = None):
        self.file_path = Path(file_path) if file_path else Path.cwd() / DEFAULT_EXCLUSIONS_FILE

    def load(self) -> ExclusionList:
        """Load the current snapshot; a missing file is an empty snapshot.

        Raises:
            ExclusionStoreError: the file exists but cannot be read or parsed
        """
        if not self.file_path.exists():
            return ExclusionList()

        try:
            data = read_data_file(self.file_path)
        except (OSError, ValueError) as exc:
            raise ExclusionStoreError(
                f"Failed to load excluded games: {exc}",
                file_path=str(self.file_path), operation="load",
            ) from exc

        if data is None:
            return ExclusionList()
        if isinstance(data, dict):
            rows = data.get("excludedGames") or []
        elif isinstance(data, list):
            rows = data
        else:
            raise ExclusionStoreError(
                "Exclusion file must hold a mapping or a list",
                file_path=str(self.file_path), operation="load",
            )

        entries = []
        for idx, row in enumerate(rows):
            if not isinstance(row, dict):
                logger.warning("Skipping malformed exclusion #%d in %s", idx, self.file_path)
                continue
            try:
                entries.append(ExclusionEntry.from_legacy(row))
            except ValidationError as exc:
                logger.warning("Skipping exclusion #%d in %s: %s", idx, self.file_path, exc)
        logger.debug("Loaded %d exclusions from %s", len(entries), self.file_path)
        return ExclusionList(entries)

    def save(self, exclusions: ExclusionList) -> None:
        """Replace the stored snapshot with ``exclusions``.

        Raises:
            ExclusionStoreError: the file cannot be written
        """
        payload = {
            "excludedGames": exclusions.to_legacy(),
            "lastUpdated": datetime.now(timezone.utc).isoformat(),
        }
        try:
            write_data_file_atomic(self.file_path, payload)
        except OSError as exc:
            raise ExclusionStoreError(
                f"Failed to save excluded games: {exc}",
                file_path=str(self.file_path), operation="save",
            ) from exc

    def exclude_game(self, name: str, game_id: Optional[int] = None,
                     reason: str = "") -> ExclusionOperationResult:
        exclusions = self.load()
        if exclusions.find(name, game_id) is not None:
            return ExclusionOperationResult(False, f'Game "{name}" is already excluded')

        try:
            updated = exclusions.add(name, game_id, reason)
        except ValidationError as exc:
            return ExclusionOperationResult(False, str(exc))

        try:
            self.save(updated)
        except ExclusionStoreError as exc:
            logger.error("%s", exc)
            return ExclusionOperationResult(False, "Failed to save exclusion")

        logger.info('Excluded game: "%s"', name)
        return ExclusionOperationResult(True, f'Game "{name}" has been excluded')

    def unexclude_game(self, name: str, game_id: Optional[int] = None) -> ExclusionOperationResult:
        exclusions = self.load()
        if exclusions.find(name, game_id) is None:
            return ExclusionOperationResult(False, f'Game "{name}" is not in the exclusion list')

        try:
            self.save(exclusions.remove(name, game_id))
        except ExclusionStoreError as exc:
            logger.error("%s", exc)
            return ExclusionOperationResult(False, "Failed to save inclusion")

        logger.info('Included game: "%s"', name)
        return ExclusionOperationResult(True, f'Game "{name}" has been included')

    def is_game_excluded(self, name: str, game_id: Optional[int] = None) -> bool:
        return self.load().is_name_excluded(name, game_id)
