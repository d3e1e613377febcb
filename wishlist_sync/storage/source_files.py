"""Source-adapter boundary: read already-fetched title lists from disk.

Accepted shapes (JSON or YAML):

- a list of rows, each a bare title or ``{"name": ..., "id": ...}``
- a mapping with the rows under ``"games"``
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List, Union

from ..core.game_models import GameCollection
from ..exceptions import FileOperationError, SourceFormatError
from .file_io import read_data_file

logger = logging.getLogger(__name__)


def load_game_rows(path: Union[str, Path]) -> List[Any]:
    """Read the raw rows of a source file.

    Raises:
        FileOperationError: missing, unreadable or unparsable file
        SourceFormatError: content is not a list of rows
    """
    path = Path(path)
    try:
        data = read_data_file(path)
    except (OSError, ValueError) as exc:
        raise FileOperationError(
            f"Cannot read game list: {exc}", file_path=str(path), operation="read"
        ) from exc

    if data is None:
        return []
    if isinstance(data, dict):
        data = data.get("games")
    if not isinstance(data, list):
        raise SourceFormatError("Game list must be a list of rows", file_path=str(path))
    return data


def load_collection(path: Union[str, Path], source_label: str, owner_id: str = "") -> GameCollection:
    """Build a GameCollection from a source file."""
    rows = load_game_rows(path)
    try:
        collection = GameCollection.from_rows(rows, source_label, owner_id)
    except SourceFormatError as exc:
        exc.details.setdefault("file_path", str(path))
        raise
    logger.info("Loaded %d %s games from %s", len(collection), source_label, path)
    return collection
