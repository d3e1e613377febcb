"""Wishlist Sync - batch controller.

Public API:
- configure_logging(config) -> installed handlers
- run_comparison(config, first, second, exclusions) -> CompareWishlistsOutput

Collections not passed in are loaded from the source files named in the
config; the exclusion snapshot is loaded fresh from the registry on every run.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

from ..config.models import AppConfig, SourceConfig
from ..core.exclusions import ExclusionEntry
from ..core.game_models import GameCollection
from ..exceptions import ConfigurationError
from ..logging_config import setup_logging
from ..storage.exclusion_store import ExclusionStore
from ..storage.source_files import load_collection
from .compare_service import CompareWishlistsOutput, CompareWishlistsUseCase

logger = logging.getLogger(__name__)


def configure_logging(config: AppConfig) -> Dict[str, Any]:
    """Install log handlers as described by the config's logging section."""
    settings = config.logging
    return setup_logging(
        log_level=settings.level,
        log_dir=settings.log_dir,
        enable_file_logging=settings.file_logging,
        structured_json=settings.structured_json,
    )


def _resolve_collection(source: SourceConfig, provided: Optional[GameCollection],
                        side: str) -> GameCollection:
    if provided is not None:
        return provided
    if not source.path:
        raise ConfigurationError(
            f"No games provided for the {side} source and no path configured",
            error_code="MISSING_SOURCE",
            details={"side": side, "label": source.label},
        )
    return load_collection(source.path, source.label, source.owner_id)


def load_exclusions(config: AppConfig) -> List[ExclusionEntry]:
    if not config.exclusions_path:
        return []
    return ExclusionStore(config.exclusions_path).load().entries


def run_comparison(
    config: Optional[AppConfig] = None,
    first: Optional[GameCollection] = None,
    second: Optional[GameCollection] = None,
    exclusions: Optional[Iterable[ExclusionEntry]] = None,
) -> CompareWishlistsOutput:
    """Run one comparison using ``config`` for anything not passed explicitly.

    Raises:
        ConfigurationError: a side has neither a collection nor a source path
        FileOperationError, SourceFormatError: a source file cannot be used
        ExclusionStoreError: the exclusion registry cannot be read
    """
    config = config or AppConfig()
    first_collection = _resolve_collection(config.first, first, "first")
    second_collection = _resolve_collection(config.second, second, "second")
    entries = list(exclusions) if exclusions is not None else load_exclusions(config)

    logger.info(
        "Comparing %s (%d games) with %s (%d games), %d exclusions, threshold %.2f",
        first_collection.source_label, len(first_collection),
        second_collection.source_label, len(second_collection),
        len(entries), config.fuzzy_match_threshold,
    )
    use_case = CompareWishlistsUseCase(config.fuzzy_match_threshold)
    return use_case.execute(first_collection, second_collection, entries)
