from __future__ import annotations

import pytest

from wishlist_sync.core.game_models import Game, GameCollection, GameFactory, usable_id
from wishlist_sync.exceptions import SourceFormatError


def _collection(*games: Game, label: str = "steam") -> GameCollection:
    return GameCollection.from_games(games, label, "user-1")


class TestGame:
    """Game record and identity keys."""

    def test_usable_id(self):
        assert usable_id(None) is None
        assert usable_id(0) is None
        assert usable_id(730) == 730

    def test_identity_key_prefers_id(self):
        assert Game(730, "Counter-Strike").identity_key() == ("id", 730)
        assert Game(0, "Hades").identity_key() == ("name", "hades")
        assert Game(None, "Hades").identity_key() == ("name", "hades")

    def test_to_dict_omits_empty_source_ids(self):
        assert Game(None, "Hades").to_dict() == {"id": None, "name": "Hades"}
        steam = GameFactory.from_steam(730, "Counter-Strike")
        assert steam.to_dict() == {"id": 730, "name": "Counter-Strike", "source_ids": {"steam": "730"}}

    def test_from_backloggd_drops_zero_steam_id(self):
        game = GameFactory.from_backloggd("Hades", steam_app_id=0, slug="hades")
        assert game.id is None
        assert game.source_ids == {"backloggd": "hades"}
        assert not game.has_id


class TestGameFactoryRows:
    """Adapter rows into Game records."""

    def test_bare_string_row(self):
        assert GameFactory.from_row("Celeste") == Game(None, "Celeste")

    def test_mapping_row_aliases(self):
        game = GameFactory.from_row({"gameName": "Hades", "appId": "1145360"})
        assert game.id == 1145360
        assert game.name == "Hades"

    def test_platform_ids_are_stringified(self):
        game = GameFactory.from_row({"name": "Hades", "platformIds": {"steam": 1145360, "gog": None}})
        assert game.source_ids == {"steam": "1145360"}

    @pytest.mark.parametrize("row", ["   ", {"id": 1}, {"name": ""}, 42])
    def test_unusable_rows_raise(self, row):
        with pytest.raises(SourceFormatError) as exc_info:
            GameFactory.from_row(row, row_index=3)
        assert exc_info.value.details["row_index"] == 3

    @pytest.mark.parametrize("bad_id", ["abc", True])
    def test_bad_ids_raise(self, bad_id):
        with pytest.raises(SourceFormatError):
            GameFactory.from_row({"name": "Hades", "id": bad_id})


class TestGameCollectionQueries:
    """Read-only views over a collection."""

    def test_count_and_iteration(self, steam_games):
        assert steam_games.count == 4
        assert len(steam_games) == 4
        assert [g.name for g in steam_games] == steam_games.names()

    def test_contains_uses_normalized_name(self, steam_games):
        assert steam_games.contains(Game(None, "COUNTER-STRIKE"))
        assert not steam_games.contains(Game(730, "Hollow Knight"))

    def test_find_by_id_ignores_missing_ids(self):
        games = _collection(Game(0, "Hades"), Game(None, "Celeste"), Game(730, "Counter-Strike"))
        assert games.find_by_id(0) is None
        assert games.find_by_id(None) is None
        assert games.find_by_id(730).name == "Counter-Strike"
        assert games.contains_id(730)
        assert not games.contains_id(0)

    def test_find_by_name_returns_all_matches(self):
        games = _collection(Game(1, "Hades"), Game(2, "HADES!"), Game(3, "Celeste"))
        assert [g.id for g in games.find_by_name("hades")] == [1, 2]

    def test_map_and_lists(self, steam_games):
        assert steam_games.map(lambda g: g.id) == steam_games.ids()
        assert steam_games.to_list() == list(steam_games.items)


class TestGameCollectionTransformations:
    """Every transformation returns a new collection."""

    def test_add_is_noop_for_known_name(self):
        games = _collection(Game(730, "Counter-Strike"))
        assert games.add(Game(999, "COUNTER-STRIKE")) is games

    def test_add_appends(self):
        games = _collection(Game(730, "Counter-Strike"))
        updated = games.add(Game(None, "Hades"))
        assert updated.names() == ["Counter-Strike", "Hades"]
        assert games.names() == ["Counter-Strike"]
        assert updated.source_label == "steam"

    def test_remove_by_normalized_name(self):
        games = _collection(Game(1, "Hades"), Game(2, "hades"), Game(3, "Celeste"))
        assert games.remove(Game(None, "HADES")).names() == ["Celeste"]

    def test_filter(self, steam_games):
        filtered = steam_games.filter(lambda g: g.id > 1000000)
        assert filtered.names() == ["Hades"]
        assert filtered.owner_id == "user-1"

    def test_merge_skips_known_ids_and_names(self):
        first = _collection(Game(730, "Counter-Strike"))
        second = _collection(Game(730, "CS"), Game(None, "Hades"), Game(0, "Hades"), label="backloggd")
        merged = first.merge(second)
        assert merged.names() == ["Counter-Strike", "Hades"]
        assert merged.source_label == "steam"

    def test_difference_and_intersection(self):
        first = _collection(Game(730, "Counter-Strike"), Game(None, "Hades"), Game(0, "Celeste"))
        second = _collection(Game(730, "Counter Strike"), Game(None, "Hades"), label="backloggd")
        assert first.difference(second).names() == ["Celeste"]
        assert first.intersection(second).names() == ["Counter-Strike", "Hades"]

    def test_items_are_coerced_to_tuple(self):
        games = GameCollection("steam", "user-1", [Game(None, "Hades")])
        assert isinstance(games.items, tuple)

    def test_empty(self):
        games = GameCollection.empty("steam")
        assert len(games) == 0
        assert games.owner_id == ""
