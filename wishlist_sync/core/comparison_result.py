"""Immutable comparison result with derived statistics."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from .comparator import ComparisonOutcome
from .game_models import Game
from .normalization import normalize_name


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _unique_by_name(games: Iterable[Game]) -> Tuple[Game, ...]:
    seen = set()
    unique: List[Game] = []
    for game in games:
        key = normalize_name(game.name)
        if key in seen:
            continue
        seen.add(key)
        unique.append(game)
    return tuple(unique)


@dataclass(frozen=True)
class ComparisonResult:
    """Outcome of one comparison run.

    ``first_label``/``second_label`` name the two sources (e.g. "steam",
    "backloggd"). Derived views (``filter``, ``remove_duplicates``) return
    new results with the same labels and timestamp.
    """

    both: Tuple[Game, ...]
    only_in_first: Tuple[Game, ...]
    only_in_second: Tuple[Game, ...]
    first_label: str
    second_label: str
    compared_at: datetime = field(default_factory=_utcnow)

    def __post_init__(self) -> None:
        for name in ("both", "only_in_first", "only_in_second"):
            value = getattr(self, name)
            if not isinstance(value, tuple):
                object.__setattr__(self, name, tuple(value))

    @classmethod
    def from_outcome(cls, outcome: ComparisonOutcome, first_label: str, second_label: str,
                     compared_at: Optional[datetime] = None) -> "ComparisonResult":
        return cls(
            both=outcome.both,
            only_in_first=outcome.only_in_first,
            only_in_second=outcome.only_in_second,
            first_label=first_label,
            second_label=second_label,
            compared_at=compared_at or _utcnow(),
        )

    @classmethod
    def empty(cls, first_label: str, second_label: str) -> "ComparisonResult":
        return cls((), (), (), first_label, second_label)

    # ------------------------------------------------------------------
    # Metrics
    # ------------------------------------------------------------------

    @property
    def total_unique_games(self) -> int:
        return len(self.both) + len(self.only_in_first) + len(self.only_in_second)

    @property
    def match_count(self) -> int:
        return len(self.both)

    @property
    def match_percentage(self) -> float:
        total = self.total_unique_games
        if total == 0:
            return 0.0
        return self.match_count / total * 100

    @property
    def are_identical(self) -> bool:
        return not self.only_in_first and not self.only_in_second

    @property
    def have_overlap(self) -> bool:
        return bool(self.both)

    @property
    def statistics(self) -> Dict[str, Any]:
        return {
            "total": self.total_unique_games,
            "in_both": len(self.both),
            "only_in_first": len(self.only_in_first),
            "only_in_second": len(self.only_in_second),
            "match_percentage": f"{self.match_percentage:.2f}%",
        }

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------

    def _replace_lists(self, both: Iterable[Game], only_in_first: Iterable[Game],
                       only_in_second: Iterable[Game]) -> "ComparisonResult":
        return ComparisonResult(
            both=tuple(both),
            only_in_first=tuple(only_in_first),
            only_in_second=tuple(only_in_second),
            first_label=self.first_label,
            second_label=self.second_label,
            compared_at=self.compared_at,
        )

    def remove_duplicates(self) -> "ComparisonResult":
        """Keep the first game per normalized name in each list."""
        return self._replace_lists(
            _unique_by_name(self.both),
            _unique_by_name(self.only_in_first),
            _unique_by_name(self.only_in_second),
        )

    def filter(self, predicate: Callable[[Game], bool]) -> "ComparisonResult":
        return self._replace_lists(
            (g for g in self.both if predicate(g)),
            (g for g in self.only_in_first if predicate(g)),
            (g for g in self.only_in_second if predicate(g)),
        )

    # ------------------------------------------------------------------
    # Presentation
    # ------------------------------------------------------------------

    def to_user_friendly_format(self) -> Dict[str, List[Any]]:
        """Sections for the report page.

        Games only in the first source should be added to the second
        source's wishlist, and vice versa.
        """
        return {
            f"Add to {self.second_label} Wishlist": [g.name for g in self.only_in_first],
            f"Add to {self.first_label} Wishlist": [g.to_dict() for g in self.only_in_second],
            "Already on Both": [g.to_dict() for g in self.both],
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "both": [g.to_dict() for g in self.both],
            "only_in_first": [g.to_dict() for g in self.only_in_first],
            "only_in_second": [g.to_dict() for g in self.only_in_second],
            "metadata": {
                "first_platform": self.first_label,
                "second_platform": self.second_label,
                "compared_at": self.compared_at.isoformat(),
                "total_games": self.total_unique_games,
            },
            "statistics": self.statistics,
        }
