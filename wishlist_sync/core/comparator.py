"""Three-way reconciliation of two game collections.

Matching is greedy and order-dependent: each first-side game takes the first
unconsumed second-side game (in collection order) that is similar enough.
There is no backtracking, so when a first-side game has several candidates
within the threshold, input order decides which one is chosen.

Consumption is tracked by normalized name rather than id, because many games
share a ``None``/``0`` id and would otherwise consume each other.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Set, Tuple

from .game_models import Game, GameCollection
from .normalization import normalize_name
from .similarity import DEFAULT_THRESHOLD, similarity_ratio, within_threshold

logger = logging.getLogger(__name__)

BOTH = "both"
ONLY_IN_FIRST = "only_in_first"


@dataclass(frozen=True)
class ComparisonOutcome:
    """Raw comparator output before it is wrapped into a ComparisonResult."""

    both: Tuple[Game, ...]
    only_in_first: Tuple[Game, ...]
    only_in_second: Tuple[Game, ...]
    matches: Tuple[Tuple[Game, Game], ...] = ()


def compare(first: GameCollection, second: GameCollection,
            threshold: float = DEFAULT_THRESHOLD) -> ComparisonOutcome:
    """Partition two collections into both / only-in-first / only-in-second.

    The three outputs are pairwise disjoint by normalized name. A first-side
    game whose normalized name was already placed joins the same bucket
    again; ``ComparisonResult.remove_duplicates`` collapses such repeats.

    A negative ``threshold`` is treated as 0, so identical normalized names
    always match.
    """
    # Names are normalized once per item; the inner loop is O(|first|*|second|).
    second_items: List[Tuple[Game, str]] = [(g, normalize_name(g.name)) for g in second.items]

    consumed: Set[str] = set()
    placed: Dict[str, str] = {}
    both: List[Game] = []
    only_in_first: List[Game] = []
    matches: List[Tuple[Game, Game]] = []

    for g1 in first.items:
        n1 = normalize_name(g1.name)

        bucket = placed.get(n1)
        if bucket == BOTH:
            both.append(g1)
            continue
        if bucket == ONLY_IN_FIRST:
            only_in_first.append(g1)
            continue

        match = None
        for g2, n2 in second_items:
            if n2 in consumed:
                continue
            if within_threshold(n1, n2, threshold):
                match = (g2, n2)
                break

        if match is not None:
            g2, n2 = match
            both.append(g1)
            consumed.add(n2)
            matches.append((g1, g2))
            placed[n1] = BOTH
            if n1 != n2 and logger.isEnabledFor(logging.DEBUG):
                logger.debug(
                    "Fuzzy match: %r ~ %r (ratio %.2f)",
                    g1.name, g2.name, similarity_ratio(g1.name, g2.name),
                )
        else:
            only_in_first.append(g1)
            placed[n1] = ONLY_IN_FIRST

    both_names = {n for n, bucket in placed.items() if bucket == BOTH}
    only_in_second = [
        g2 for g2, n2 in second_items if n2 not in consumed and n2 not in both_names
    ]

    logger.debug(
        "Compared %s (%d) with %s (%d): both=%d only_first=%d only_second=%d",
        first.source_label, len(first), second.source_label, len(second),
        len(both), len(only_in_first), len(only_in_second),
    )

    return ComparisonOutcome(
        both=tuple(both),
        only_in_first=tuple(only_in_first),
        only_in_second=tuple(only_in_second),
        matches=tuple(matches),
    )
