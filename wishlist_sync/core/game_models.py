"""Game records and the immutable GameCollection container.

A game's identity for matching and deduplication is its normalized name.
The numeric ``id`` is auxiliary metadata: many titles (Backloggd entries
without a Steam page, for instance) carry ``None`` or ``0``, so using it as a
primary key would merge unrelated games.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, TypeVar, Union

from ..exceptions import SourceFormatError
from .normalization import normalize_name

T = TypeVar("T")

IdentityKey = Tuple[str, Union[int, str]]


def usable_id(value: Optional[int]) -> Optional[int]:
    """Return ``value`` when it identifies a game, else None (``None``/``0``)."""
    if value is None or value == 0:
        return None
    return value


@dataclass(frozen=True)
class Game:
    """A single title as reported by one source."""

    id: Optional[int]
    name: str
    source_ids: Dict[str, str] = field(default_factory=dict, hash=False)

    @property
    def normalized_name(self) -> str:
        return normalize_name(self.name)

    @property
    def has_id(self) -> bool:
        return usable_id(self.id) is not None

    def identity_key(self) -> IdentityKey:
        """Key used by id-based set operations; id-less games fall back to the name."""
        game_id = usable_id(self.id)
        if game_id is not None:
            return ("id", game_id)
        return ("name", self.normalized_name)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"id": self.id, "name": self.name}
        if self.source_ids:
            data["source_ids"] = dict(self.source_ids)
        return data

    def __str__(self) -> str:
        return self.name


def _coerce_id(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ValueError("boolean is not a game id")
    return int(value)


class GameFactory:
    """Builds Game records at the source-adapter boundary."""

    @staticmethod
    def create(game_id: Optional[int], name: str) -> Game:
        return Game(id=game_id, name=name)

    @staticmethod
    def from_steam(app_id: int, name: str) -> Game:
        return Game(id=app_id, name=name, source_ids={"steam": str(app_id)})

    @staticmethod
    def from_backloggd(name: str, steam_app_id: Optional[int] = None,
                       slug: Optional[str] = None) -> Game:
        source_ids: Dict[str, str] = {}
        if slug:
            source_ids["backloggd"] = slug
        if usable_id(steam_app_id) is not None:
            source_ids["steam"] = str(steam_app_id)
        return Game(id=usable_id(steam_app_id), name=name, source_ids=source_ids)

    @staticmethod
    def from_row(row: Union[str, Mapping[str, Any]], row_index: Optional[int] = None) -> Game:
        """Convert one adapter row into a Game.

        Accepts a bare title string (legacy shape) or a mapping with ``name``
        (or ``gameName``/``steamName``) and an optional ``id`` (or ``appId``).

        Raises:
            SourceFormatError: when the row has no usable name or a bad id
        """
        if isinstance(row, str):
            if not row.strip():
                raise SourceFormatError("Empty game title", row_index=row_index)
            return Game(id=None, name=row)

        if not isinstance(row, Mapping):
            raise SourceFormatError(
                f"Unsupported row type: {type(row).__name__}", row_index=row_index
            )

        name = row.get("name") or row.get("gameName") or row.get("steamName")
        if not isinstance(name, str) or not name.strip():
            raise SourceFormatError("Row has no game name", row_index=row_index)

        raw_id = row.get("id", row.get("appId"))
        try:
            game_id = _coerce_id(raw_id)
        except (TypeError, ValueError) as exc:
            raise SourceFormatError(
                f"Invalid game id {raw_id!r} for {name!r}", row_index=row_index
            ) from exc

        source_ids = row.get("source_ids") or row.get("platformIds") or {}
        if not isinstance(source_ids, Mapping):
            source_ids = {}
        return Game(
            id=game_id,
            name=name,
            source_ids={str(k): str(v) for k, v in source_ids.items() if v is not None},
        )


@dataclass(frozen=True)
class GameCollection:
    """Ordered, immutable list of games from one source for one owner.

    Every operation that looks like a mutation returns a new collection.
    All operations are linear or O(n*m); wishlists hold hundreds of items so
    no index is kept.
    """

    source_label: str
    owner_id: str
    items: Tuple[Game, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.items, tuple):
            object.__setattr__(self, "items", tuple(self.items))

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @classmethod
    def empty(cls, source_label: str, owner_id: str = "") -> "GameCollection":
        return cls(source_label, owner_id, ())

    @classmethod
    def from_games(cls, games: Iterable[Game], source_label: str,
                   owner_id: str = "") -> "GameCollection":
        return cls(source_label, owner_id, tuple(games))

    @classmethod
    def from_rows(cls, rows: Iterable[Union[str, Mapping[str, Any]]], source_label: str,
                  owner_id: str = "") -> "GameCollection":
        games = [GameFactory.from_row(row, row_index=idx) for idx, row in enumerate(rows)]
        return cls(source_label, owner_id, tuple(games))

    def _with_items(self, items: Iterable[Game]) -> "GameCollection":
        return GameCollection(self.source_label, self.owner_id, tuple(items))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def count(self) -> int:
        return len(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Game]:
        return iter(self.items)

    def contains(self, game: Game) -> bool:
        """True when an item with the same normalized name exists."""
        key = game.normalized_name
        return any(g.normalized_name == key for g in self.items)

    def contains_id(self, game_id: Optional[int]) -> bool:
        return self.find_by_id(game_id) is not None

    def find_by_id(self, game_id: Optional[int]) -> Optional[Game]:
        """First game with this id, or None. ``None``/``0`` never match."""
        if usable_id(game_id) is None:
            return None
        for game in self.items:
            if game.id == game_id:
                return game
        return None

    def find_by_name(self, name: str) -> List[Game]:
        """All games whose normalized name equals ``name``'s normalized form."""
        key = normalize_name(name)
        return [g for g in self.items if g.normalized_name == key]

    def ids(self) -> List[Optional[int]]:
        return [g.id for g in self.items]

    def names(self) -> List[str]:
        return [g.name for g in self.items]

    def to_list(self) -> List[Game]:
        return list(self.items)

    # ------------------------------------------------------------------
    # Transformations
    # ------------------------------------------------------------------

    def add(self, game: Game) -> "GameCollection":
        if self.contains(game):
            return self
        return self._with_items(self.items + (game,))

    def remove(self, game: Game) -> "GameCollection":
        key = game.normalized_name
        return self._with_items(g for g in self.items if g.normalized_name != key)

    def filter(self, predicate: Callable[[Game], bool]) -> "GameCollection":
        return self._with_items(g for g in self.items if predicate(g))

    def map(self, fn: Callable[[Game], T]) -> List[T]:
        return [fn(g) for g in self.items]

    def _identity_keys(self) -> set:
        return {g.identity_key() for g in self.items}

    def merge(self, other: "GameCollection") -> "GameCollection":
        """Union keeping this collection's labels; other's items whose id already exists are skipped."""
        keys = self._identity_keys()
        merged = list(self.items)
        for game in other.items:
            key = game.identity_key()
            if key not in keys:
                merged.append(game)
                keys.add(key)
        return self._with_items(merged)

    def difference(self, other: "GameCollection") -> "GameCollection":
        keys = other._identity_keys()
        return self.filter(lambda g: g.identity_key() not in keys)

    def intersection(self, other: "GameCollection") -> "GameCollection":
        keys = other._identity_keys()
        return self.filter(lambda g: g.identity_key() in keys)
