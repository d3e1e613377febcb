from __future__ import annotations

import json

import pytest

from wishlist_sync.exceptions import FileOperationError, SourceFormatError
from wishlist_sync.storage.source_files import load_collection, load_game_rows


def test_json_list_of_mixed_rows(tmp_path):
    path = tmp_path / "steam.json"
    path.write_text(
        json.dumps(["Celeste", {"name": "Hades", "id": 1145360}, {"steamName": "Doom", "appId": 379720}]),
        encoding="utf-8",
    )
    collection = load_collection(path, "steam", "user-1")
    assert collection.names() == ["Celeste", "Hades", "Doom"]
    assert collection.ids() == [None, 1145360, 379720]
    assert collection.source_label == "steam"
    assert collection.owner_id == "user-1"


def test_yaml_mapping_with_games_key(tmp_path):
    path = tmp_path / "backloggd.yaml"
    path.write_text("games:\n  - name: Hollow Knight\n  - Celeste\n", encoding="utf-8")
    assert load_collection(path, "backloggd").names() == ["Hollow Knight", "Celeste"]


def test_empty_file_is_empty_collection(tmp_path):
    path = tmp_path / "empty.json"
    path.write_text("", encoding="utf-8")
    assert load_game_rows(path) == []


def test_missing_file(tmp_path):
    with pytest.raises(FileOperationError) as exc_info:
        load_game_rows(tmp_path / "absent.json")
    assert exc_info.value.details["operation"] == "read"


def test_unparsable_file(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("[1, 2", encoding="utf-8")
    with pytest.raises(FileOperationError):
        load_game_rows(path)


@pytest.mark.parametrize("payload", ['{"items": []}', '"Hades"'])
def test_wrong_shape(tmp_path, payload):
    path = tmp_path / "odd.json"
    path.write_text(payload, encoding="utf-8")
    with pytest.raises(SourceFormatError):
        load_game_rows(path)


def test_bad_row_reports_file_and_index(tmp_path):
    path = tmp_path / "steam.json"
    path.write_text(json.dumps(["Hades", {"id": 5}]), encoding="utf-8")
    with pytest.raises(SourceFormatError) as exc_info:
        load_collection(path, "steam")
    assert exc_info.value.details["row_index"] == 1
    assert exc_info.value.details["file_path"] == str(path)
