"""Persistence boundary: exclusion registry and source title lists."""

from .exclusion_store import ExclusionOperationResult, ExclusionStore
from .source_files import load_collection, load_game_rows

__all__ = [
    "ExclusionOperationResult",
    "ExclusionStore",
    "load_collection",
    "load_game_rows",
]
