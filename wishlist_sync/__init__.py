"""
Wishlist Sync - reconcile game wishlists from two catalog platforms.

Splits two title lists into games on both lists, only on the first and only
on the second, using fuzzy name matching and a user exclusion list.
"""

__version__ = "1.0.0"

from .core import (
    ComparisonResult,
    ExclusionEntry,
    ExclusionList,
    Game,
    GameCollection,
    GameFactory,
    compare,
    filter_games,
    is_excluded,
    is_similar,
    normalize_name,
)

__all__ = [
    "__version__",
    "ComparisonResult",
    "ExclusionEntry",
    "ExclusionList",
    "Game",
    "GameCollection",
    "GameFactory",
    "compare",
    "filter_games",
    "is_excluded",
    "is_similar",
    "normalize_name",
]
