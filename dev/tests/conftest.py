from __future__ import annotations

import sys
from pathlib import Path

import pytest
from hypothesis import HealthCheck, settings

# Ensure repo root on path
ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

settings.register_profile("ci", max_examples=200, suppress_health_check=[HealthCheck.too_slow])
settings.register_profile("dev", max_examples=50)
settings.load_profile("dev")


def pytest_configure() -> None:
    """Ensure pytest base temp directory exists for CI runs."""

    base_temp = ROOT / "temp" / "pytest"
    base_temp.mkdir(parents=True, exist_ok=True)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in (
        "WISHLIST_SYNC_CONFIG",
        "WISHLIST_SYNC_FUZZY_THRESHOLD",
        "WISHLIST_SYNC_EXCLUSIONS",
        "WISHLIST_SYNC_LOG_JSON",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def steam_games():
    from wishlist_sync.core import GameCollection, GameFactory

    games = [
        GameFactory.from_steam(730, "Counter-Strike"),
        GameFactory.from_steam(1145360, "Hades"),
        GameFactory.from_steam(292030, "The Witcher 3: Wild Hunt - Game of the Year Edition"),
        GameFactory.from_steam(504230, "Celeste"),
    ]
    return GameCollection.from_games(games, "steam", "user-1")


@pytest.fixture
def backloggd_games():
    from wishlist_sync.core import GameCollection, GameFactory

    games = [
        GameFactory.from_backloggd("Counter-Strike", steam_app_id=730, slug="counter-strike"),
        GameFactory.from_backloggd("Hades", slug="hades"),
        GameFactory.from_backloggd("The Witcher 3: Wild Hunt", slug="the-witcher-3"),
        GameFactory.from_backloggd("Hollow Knight", slug="hollow-knight"),
    ]
    return GameCollection.from_games(games, "backloggd", "user-1")
