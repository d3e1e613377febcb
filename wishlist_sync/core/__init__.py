"""
Wishlist Sync - Core Package

Pure, synchronous reconciliation logic: normalization, fuzzy similarity,
game collections, exclusions, the comparator and its result type.
"""

from .normalization import NormalizedName, normalize_name
from .similarity import DEFAULT_THRESHOLD, edit_distance, is_similar, similarity_ratio
from .game_models import Game, GameCollection, GameFactory, usable_id
from .exclusions import ExclusionEntry, ExclusionList, filter_games, is_excluded
from .comparator import ComparisonOutcome, compare
from .comparison_result import ComparisonResult

__all__ = [
    "NormalizedName",
    "normalize_name",
    "DEFAULT_THRESHOLD",
    "edit_distance",
    "is_similar",
    "similarity_ratio",
    "Game",
    "GameCollection",
    "GameFactory",
    "usable_id",
    "ExclusionEntry",
    "ExclusionList",
    "filter_games",
    "is_excluded",
    "ComparisonOutcome",
    "compare",
    "ComparisonResult",
]
