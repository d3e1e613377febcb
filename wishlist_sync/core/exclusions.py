"""User-maintained exclusions applied to each side before comparison.

Matching precedence for a single entry:
1. entry and game both carry a usable id -> match on id only
2. otherwise -> match on normalized name

So an entry with only a name excludes every game with that normalized name,
whatever its id.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from ..exceptions import ValidationError
from .game_models import Game, GameCollection, usable_id
from .normalization import normalize_name

logger = logging.getLogger(__name__)

ExclusionKey = Tuple[str, Optional[int]]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _parse_timestamp(value: Any) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        logger.warning("Ignoring unparsable exclusion timestamp %r", value)
        return None


@dataclass(frozen=True)
class ExclusionEntry:
    """A game the user never wants to see in comparison results."""

    name: str
    id: Optional[int] = None
    reason: str = ""
    created_at: datetime = field(default_factory=_utcnow, compare=False)

    @classmethod
    def create(cls, name: str, game_id: Optional[int] = None, reason: str = "",
               created_at: Optional[datetime] = None) -> "ExclusionEntry":
        """Validated constructor.

        Raises:
            ValidationError: when ``name`` is empty or whitespace-only
        """
        if not name or not name.strip():
            raise ValidationError("Game name cannot be empty", field_name="name")
        return cls(
            name=name.strip(),
            id=usable_id(game_id),
            reason=(reason or "").strip(),
            created_at=created_at or _utcnow(),
        )

    @classmethod
    def from_legacy(cls, data: Mapping[str, Any]) -> "ExclusionEntry":
        """Read the persisted ``{gameName, appId, reason, excludedAt}`` shape."""
        name = data.get("gameName") or data.get("name") or ""
        raw_id = data.get("appId", data.get("id"))
        try:
            game_id = int(raw_id) if raw_id not in (None, "") else None
        except (TypeError, ValueError) as exc:
            raise ValidationError(
                f"Invalid app id {raw_id!r} for excluded game {name!r}",
                field_name="appId", expected_type="int",
            ) from exc
        return cls.create(
            name,
            game_id,
            data.get("reason") or "",
            _parse_timestamp(data.get("excludedAt", data.get("created_at"))),
        )

    @property
    def normalized_name(self) -> str:
        return normalize_name(self.name)

    def key(self) -> ExclusionKey:
        return (self.normalized_name, usable_id(self.id))

    def matches(self, game: Game) -> bool:
        entry_id = usable_id(self.id)
        game_id = usable_id(game.id)
        if entry_id is not None and game_id is not None:
            return entry_id == game_id
        return self.normalized_name == game.normalized_name

    def to_legacy(self) -> Dict[str, Any]:
        return {
            "gameName": self.name,
            "appId": self.id,
            "reason": self.reason,
            "excludedAt": self.created_at.isoformat(),
        }


def is_excluded(game: Game, entries: Iterable[ExclusionEntry]) -> bool:
    return any(entry.matches(game) for entry in entries)


def filter_games(collection: GameCollection, entries: Iterable[ExclusionEntry]) -> GameCollection:
    """Return ``collection`` without the games any entry excludes."""
    entries = list(entries)
    if not entries:
        return collection
    filtered = collection.filter(lambda g: not is_excluded(g, entries))
    removed = len(collection) - len(filtered)
    if removed:
        logger.debug(
            "Excluded %d of %d games from %s", removed, len(collection), collection.source_label
        )
    return filtered


class ExclusionList:
    """Immutable snapshot of exclusion entries, keyed by (normalized name, id).

    Changes produce a new snapshot; persisting it replaces the stored one
    wholesale (last writer wins).
    """

    def __init__(self, entries: Iterable[ExclusionEntry] = ()):
        self._entries: Dict[ExclusionKey, ExclusionEntry] = {}
        for entry in entries:
            self._entries[entry.key()] = entry

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries.values())

    def __contains__(self, entry: ExclusionEntry) -> bool:
        return entry.key() in self._entries

    @property
    def count(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> List[ExclusionEntry]:
        return list(self._entries.values())

    def find(self, name: str, game_id: Optional[int] = None) -> Optional[ExclusionEntry]:
        return self._entries.get((normalize_name(name), usable_id(game_id)))

    def add(self, name: str, game_id: Optional[int] = None, reason: str = "",
            created_at: Optional[datetime] = None) -> "ExclusionList":
        entry = ExclusionEntry.create(name, game_id, reason, created_at)
        if entry.key() in self._entries:
            return self
        return ExclusionList(self.entries + [entry])

    def remove(self, name: str, game_id: Optional[int] = None) -> "ExclusionList":
        key = (normalize_name(name), usable_id(game_id))
        if key not in self._entries:
            return self
        return ExclusionList(e for k, e in self._entries.items() if k != key)

    def is_excluded(self, game: Game) -> bool:
        return is_excluded(game, self._entries.values())

    def is_name_excluded(self, name: str, game_id: Optional[int] = None) -> bool:
        return self.is_excluded(Game(id=game_id, name=name))

    def filter_games(self, collection: GameCollection) -> GameCollection:
        return filter_games(collection, self._entries.values())

    def to_legacy(self) -> List[Dict[str, Any]]:
        return [entry.to_legacy() for entry in self._entries.values()]
