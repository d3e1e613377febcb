from __future__ import annotations

import json

import pytest
import yaml

from wishlist_sync.config import AppConfig, get_config_path, load_config, save_config, validate_config
from wishlist_sync.exceptions import ConfigurationError, ValidationError


def test_validate_config_minimal() -> None:
    payload = {
        "fuzzy_match_threshold": 0.3,
        "first": {"label": "steam", "owner_id": "76561198000000000", "path": "steam.json"},
        "second": {"label": " backloggd ", "path": "backloggd.yaml"},
        "logging": {"level": "DEBUG"},
    }
    model = validate_config(payload)
    assert model.fuzzy_match_threshold == 0.3
    assert model.first.owner_id == "76561198000000000"
    assert model.second.label == "backloggd"
    assert model.logging.level == "DEBUG"


def test_defaults() -> None:
    model = validate_config({})
    assert model.fuzzy_match_threshold == 0.2
    assert model.first.label == "steam"
    assert model.second.label == "backloggd"
    assert model.exclusions_path is None
    assert model.logging.file_logging is False


def test_unknown_keys_are_kept() -> None:
    model = validate_config({"report_title": "My wishlists"})
    assert model.model_extra == {"report_title": "My wishlists"}


def test_missing_file_gives_defaults(tmp_path) -> None:
    config = load_config(tmp_path / "absent.yaml")
    assert config == AppConfig()


def test_load_yaml(tmp_path) -> None:
    path = tmp_path / "wishlist_sync.yaml"
    path.write_text(
        "fuzzy_match_threshold: 0.1\nexclusions_path: excluded.json\nfirst:\n  label: steam\n  path: s.json\n",
        encoding="utf-8",
    )
    config = load_config(path)
    assert config.fuzzy_match_threshold == 0.1
    assert config.exclusions_path == "excluded.json"
    assert config.first.path == "s.json"


def test_load_json(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"fuzzy_match_threshold": 0.25}), encoding="utf-8")
    assert load_config(path).fuzzy_match_threshold == 0.25


@pytest.mark.parametrize("threshold", [-0.1, 1.5])
def test_threshold_out_of_range(tmp_path, threshold) -> None:
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump({"fuzzy_match_threshold": threshold}), encoding="utf-8")
    with pytest.raises(ValidationError) as exc_info:
        load_config(path)
    assert exc_info.value.details["field_name"] == "fuzzy_match_threshold"


def test_blank_source_label_rejected(tmp_path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("first:\n  label: '  '\n", encoding="utf-8")
    with pytest.raises(ValidationError):
        load_config(path)


def test_non_mapping_root(tmp_path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigurationError) as exc_info:
        load_config(path)
    assert exc_info.value.error_code == "CONFIG_ERROR"


def test_invalid_yaml(tmp_path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("first: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_config(path)


def test_env_overrides(tmp_path, monkeypatch) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("fuzzy_match_threshold: 0.1\n", encoding="utf-8")
    monkeypatch.setenv("WISHLIST_SYNC_FUZZY_THRESHOLD", "0.35")
    monkeypatch.setenv("WISHLIST_SYNC_EXCLUSIONS", str(tmp_path / "ex.json"))
    config = load_config(path)
    assert config.fuzzy_match_threshold == 0.35
    assert config.exclusions_path == str(tmp_path / "ex.json")


def test_env_threshold_must_be_numeric(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("WISHLIST_SYNC_FUZZY_THRESHOLD", "loose")
    with pytest.raises(ValidationError) as exc_info:
        load_config(tmp_path / "absent.yaml")
    assert exc_info.value.details["expected_type"] == "float"


def test_config_path_env(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("WISHLIST_SYNC_CONFIG", str(tmp_path / "custom.yaml"))
    assert get_config_path() == tmp_path / "custom.yaml"


def test_save_and_reload(tmp_path) -> None:
    config = validate_config({"fuzzy_match_threshold": 0.15, "first": {"label": "steam", "path": "a.json"}})
    for name in ("out.yaml", "out.json"):
        saved = save_config(config, tmp_path / name)
        assert load_config(saved) == config
