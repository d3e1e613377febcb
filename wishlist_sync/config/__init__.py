"""Wishlist Sync - configuration package (pydantic models + YAML/JSON I/O)."""

from .models import AppConfig, LoggingSettings, SourceConfig, validate_config
from .io import get_config_path, load_config, save_config

__all__ = [
    "AppConfig",
    "LoggingSettings",
    "SourceConfig",
    "validate_config",
    "get_config_path",
    "load_config",
    "save_config",
]
