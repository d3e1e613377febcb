"""Config I/O utilities."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import pydantic
import yaml

from ..exceptions import ConfigurationError, ValidationError
from .models import AppConfig, validate_config

logger = logging.getLogger(__name__)

CONFIG_ENV = "WISHLIST_SYNC_CONFIG"
THRESHOLD_ENV = "WISHLIST_SYNC_FUZZY_THRESHOLD"
EXCLUSIONS_ENV = "WISHLIST_SYNC_EXCLUSIONS"
DEFAULT_CONFIG_NAME = "wishlist_sync.yaml"

PathLike = Union[str, Path]


def get_config_path() -> Path:
    override = os.environ.get(CONFIG_ENV, "").strip()
    if override:
        return Path(override)
    return Path.cwd() / DEFAULT_CONFIG_NAME


def _read_mapping(path: Path) -> Dict[str, Any]:
    raw = path.read_text(encoding="utf-8")
    try:
        # YAML is a superset of JSON, so one loader serves both suffixes.
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise ConfigurationError(
            f"Config file is not valid YAML/JSON: {exc}", file_path=str(path)
        ) from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError("Config root must be a mapping", file_path=str(path))
    return data


def _apply_env_overrides(data: Dict[str, Any]) -> Dict[str, Any]:
    threshold = os.environ.get(THRESHOLD_ENV, "").strip()
    if threshold:
        try:
            data["fuzzy_match_threshold"] = float(threshold)
        except ValueError as exc:
            raise ValidationError(
                f"{THRESHOLD_ENV} must be a number, got {threshold!r}",
                field_name="fuzzy_match_threshold", expected_type="float",
            ) from exc
    exclusions = os.environ.get(EXCLUSIONS_ENV, "").strip()
    if exclusions:
        data["exclusions_path"] = exclusions
    return data


def load_config(config_path: Optional[PathLike] = None) -> AppConfig:
    """Load and validate the application config.

    A missing file yields the defaults. Environment overrides are applied
    after the file is read.

    Raises:
        ConfigurationError: unreadable or malformed file
        ValidationError: values rejected by the config model
    """
    path = Path(config_path) if config_path is not None else get_config_path()
    data: Dict[str, Any] = {}
    if path.exists():
        data = _read_mapping(path)
        logger.debug("Loaded config from %s", path)
    else:
        logger.debug("No config at %s, using defaults", path)

    data = _apply_env_overrides(data)
    try:
        return validate_config(data)
    except pydantic.ValidationError as exc:
        errors = exc.errors()
        field_name = ".".join(str(p) for p in errors[0]["loc"]) if errors else None
        raise ValidationError(
            f"Invalid configuration: {exc}",
            field_name=field_name,
            details={"file_path": str(path), "errors": len(errors)},
        ) from exc


def save_config(config: AppConfig, config_path: Optional[PathLike] = None) -> Path:
    """Write the config as YAML (or JSON when the path ends in ``.json``)."""
    path = Path(config_path) if config_path is not None else get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    data = config.model_dump(mode="json")
    if path.suffix.lower() == ".json":
        text = json.dumps(data, indent=2)
    else:
        text = yaml.safe_dump(data, sort_keys=False)
    path.write_text(text, encoding="utf-8")
    return path
