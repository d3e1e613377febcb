"""Compare-wishlists use case.

Business rules:
1. Excluded games are removed from each side independently
2. Games are matched by fuzzy name comparison (default 20% threshold)
3. Duplicates are removed from every result list
4. Results are split into: both, only in first, only in second
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Iterable, Optional

from ..core.comparator import compare
from ..core.comparison_result import ComparisonResult
from ..core.exclusions import ExclusionEntry, filter_games
from ..core.game_models import GameCollection
from ..core.similarity import DEFAULT_THRESHOLD
from ..logging_config import LoggingTimer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompareWishlistsOutput:
    comparison: ComparisonResult
    statistics: Dict[str, Any]


class CompareWishlistsUseCase:
    """Runs one comparison: exclusions -> comparator -> deduplicated result."""

    def __init__(self, fuzzy_match_threshold: float = DEFAULT_THRESHOLD):
        self.fuzzy_match_threshold = fuzzy_match_threshold

    def execute(
        self,
        first: GameCollection,
        second: GameCollection,
        exclusions: Optional[Iterable[ExclusionEntry]] = None,
        threshold: Optional[float] = None,
        compared_at: Optional[datetime] = None,
    ) -> CompareWishlistsOutput:
        threshold = self.fuzzy_match_threshold if threshold is None else threshold
        entries = list(exclusions or ())

        filtered_first = filter_games(first, entries)
        filtered_second = filter_games(second, entries)

        with LoggingTimer(f"compare {first.source_label} vs {second.source_label}"):
            outcome = compare(filtered_first, filtered_second, threshold)

        comparison = ComparisonResult.from_outcome(
            outcome, first.source_label, second.source_label, compared_at
        ).remove_duplicates()

        statistics = {
            "total_games": comparison.total_unique_games,
            "match_count": comparison.match_count,
            "only_in_first": len(comparison.only_in_first),
            "only_in_second": len(comparison.only_in_second),
            "excluded_first": len(first) - len(filtered_first),
            "excluded_second": len(second) - len(filtered_second),
            "match_percentage": f"{comparison.match_percentage:.2f}%",
        }

        logger.info(
            "Comparison %s vs %s: %d in both, %d only in %s, %d only in %s (%s)",
            first.source_label, second.source_label,
            statistics["match_count"],
            statistics["only_in_first"], first.source_label,
            statistics["only_in_second"], second.source_label,
            statistics["match_percentage"],
        )
        return CompareWishlistsOutput(comparison=comparison, statistics=statistics)
