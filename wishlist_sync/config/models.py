from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..core.similarity import DEFAULT_THRESHOLD


class _BaseConfigModel(BaseModel):
    model_config = ConfigDict(extra="allow")


class SourceConfig(_BaseConfigModel):
    label: str
    owner_id: str = ""
    path: Optional[str] = None

    @field_validator("label")
    @classmethod
    def _label_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("source label cannot be empty")
        return value.strip()


class LoggingSettings(_BaseConfigModel):
    level: str = "INFO"
    log_dir: Optional[str] = None
    file_logging: bool = False
    structured_json: Optional[bool] = None


class AppConfig(_BaseConfigModel):
    fuzzy_match_threshold: float = Field(default=DEFAULT_THRESHOLD, ge=0.0, le=1.0)
    exclusions_path: Optional[str] = None
    first: SourceConfig = Field(default_factory=lambda: SourceConfig(label="steam"))
    second: SourceConfig = Field(default_factory=lambda: SourceConfig(label="backloggd"))
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


def validate_config(payload: Dict[str, Any]) -> AppConfig:
    return AppConfig.model_validate(payload or {})
