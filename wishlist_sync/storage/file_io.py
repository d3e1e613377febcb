"""Shared read/write helpers for the YAML/JSON data files."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import yaml

YAML_SUFFIXES = (".yaml", ".yml")


def is_yaml_path(path: Path) -> bool:
    return path.suffix.lower() in YAML_SUFFIXES


def read_data_file(path: Path) -> Any:
    """Parse a JSON or YAML file.

    Raises:
        OSError: the file cannot be read
        ValueError: the content does not parse
    """
    raw = path.read_text(encoding="utf-8")
    if not raw.strip():
        return None
    if is_yaml_path(path):
        try:
            return yaml.safe_load(raw)
        except yaml.YAMLError as exc:
            raise ValueError(str(exc)) from exc
    return json.loads(raw)


def write_data_file_atomic(path: Path, data: Any) -> None:
    """Write ``data`` next to ``path`` and move it into place in one step."""
    path.parent.mkdir(parents=True, exist_ok=True)
    if is_yaml_path(path):
        text = yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
    else:
        text = json.dumps(data, indent=2, ensure_ascii=False)

    tmp = path.with_name(path.name + ".part")
    try:
        tmp.write_text(text, encoding="utf-8")
        os.replace(str(tmp), str(path))
    finally:
        if tmp.exists():
            tmp.unlink()
