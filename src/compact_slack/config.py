"""Configuration management for compact-slack."""

from __future__ import annotations

import json
import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import httpx
from pydantic import Field, field_validator
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

logger = logging.getLogger(__name__)

HOME_ENV_VAR = "COMPACT_SLACK_HOME"
DEFAULT_HOME = Path("~/.compact-slack")

# Keys stored in the global config file, mapped to the environment names the
# settings fields are validated under.
_GLOBAL_KEYS = {
    "webhookUrl": "SLACK_WEBHOOK_URL",
    "sessionId": "SESSION_ID",
    "enableProgress": "ENABLE_PROGRESS",
    "enableCompactPrompts": "ENABLE_COMPACT_PROMPTS",
}


def config_home() -> Path:
    """Return the directory holding the global config and CLI state."""

    override = os.environ.get(HOME_ENV_VAR, "").strip()
    base = Path(override) if override else DEFAULT_HOME
    return base.expanduser()


def global_config_path() -> Path:
    return config_home() / "config.json"


def load_global_config() -> dict[str, Any]:
    """Read the global config file, treating a missing or broken file as empty."""

    path = global_config_path()
    if not path.exists():
        return {}
    try:
        document = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Could not read global config file", extra={"path": str(path), "error": str(exc)})
        return {}
    if not isinstance(document, dict):
        logger.warning("Ignoring non-object global config file", extra={"path": str(path)})
        return {}
    return document


def save_global_config(updates: dict[str, Any]) -> dict[str, Any]:
    """Merge ``updates`` into the global config file and return the result."""

    path = global_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    merged = {**load_global_config(), **{key: value for key, value in updates.items() if value is not None}}
    path.write_text(json.dumps(merged, indent=2), encoding="utf-8")
    get_settings.cache_clear()
    return merged


class GlobalConfigSource(PydanticBaseSettingsSource):
    """Settings source backed by the user's global JSON config file."""

    def get_field_value(self, field: FieldInfo, field_name: str) -> tuple[Any, str, bool]:
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        document = load_global_config()
        return {
            env_name: document[key]
            for key, env_name in _GLOBAL_KEYS.items()
            if document.get(key) is not None
        }


class SlackSettings(BaseSettings):
    """Runtime configuration sourced from the environment, global config and a local .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
    )

    webhook_url: str | None = Field(default=None, validation_alias="SLACK_WEBHOOK_URL")
    session_id: str | None = Field(default=None, validation_alias="SESSION_ID")
    enable_progress: bool = Field(default=True, validation_alias="ENABLE_PROGRESS")
    enable_compact_prompts: bool = Field(default=True, validation_alias="ENABLE_COMPACT_PROMPTS")
    log_level: str = Field(default="INFO", validation_alias="COMPACT_SLACK_LOG_LEVEL")
    request_timeout: float = Field(default=10.0, validation_alias="COMPACT_SLACK_TIMEOUT")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (init_settings, env_settings, GlobalConfigSource(settings_cls), dotenv_settings)

    @field_validator("webhook_url", "session_id")
    @classmethod
    def _blank_to_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        stripped = value.strip()
        return stripped or None

    @field_validator("webhook_url")
    @classmethod
    def _validate_webhook_url(cls, value: str | None) -> str | None:
        if value is None:
            return None
        try:
            url = httpx.URL(value)
        except httpx.InvalidURL as exc:
            raise ValueError(f"SLACK_WEBHOOK_URL is not a valid URL: {exc}") from exc
        if url.scheme not in {"http", "https"} or not url.host:
            raise ValueError("SLACK_WEBHOOK_URL must be an http(s) URL")
        return value

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if normalized not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError(
                "COMPACT_SLACK_LOG_LEVEL must be one of CRITICAL, ERROR, WARNING, INFO, DEBUG"
            )
        return normalized

    @field_validator("request_timeout")
    @classmethod
    def _validate_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("COMPACT_SLACK_TIMEOUT must be > 0")
        return value


@lru_cache(maxsize=1)
def get_settings() -> SlackSettings:
    """Return cached settings instance."""

    return SlackSettings()


__all__ = [
    "SlackSettings",
    "GlobalConfigSource",
    "config_home",
    "get_settings",
    "global_config_path",
    "load_global_config",
    "save_global_config",
]
