"""Configuration management.

Settings are read from init kwargs, environment variables, ``.env`` and an
optional YAML file (in that order of precedence). The YAML file is the one
named by ``GARDEN_SEARCH_CONFIG_FILE``, else ``config.yaml`` in the working
directory or the project root; its keys may sit at the top level or under a
``garden_search:`` section. The search core never reads this module
directly; callers build a ChatClientConfig from it.
"""

import logging
import os
import warnings
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml
from pydantic import Field, field_validator
from pydantic.fields import FieldInfo
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict


# Named policy: a failing relevance check lets the query through.
VALIDATION_FAIL_OPEN = True

CONFIG_FILE_ENV = "GARDEN_SEARCH_CONFIG_FILE"
CONFIG_SECTION = "garden_search"


def config_file_candidates() -> List[Path]:
    candidates = []
    explicit = os.getenv(CONFIG_FILE_ENV)
    if explicit:
        candidates.append(Path(explicit).expanduser())
    candidates.extend([
        Path.cwd() / "config.yaml",
        Path(__file__).resolve().parents[2] / "config.yaml",
    ])
    return candidates


def load_yaml_config(paths: Optional[List[Path]] = None) -> Dict[str, Any]:
    """Return the settings mapping of the first readable YAML file, or {}."""

    seen: set[Path] = set()
    for path in paths if paths is not None else config_file_candidates():
        if path in seen:
            continue
        seen.add(path)
        try:
            if not path.exists():
                continue
            data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except (OSError, yaml.YAMLError) as exc:
            warnings.warn(f"Failed to read config file {path}: {exc}")
            continue
        if isinstance(data, dict) and isinstance(data.get(CONFIG_SECTION), dict):
            data = data[CONFIG_SECTION]
        if isinstance(data, dict):
            return {str(k).lower(): v for k, v in data.items()}
        warnings.warn(f"Config file {path} is not a mapping, ignored")
    return {}


class YamlConfigSource(PydanticBaseSettingsSource):
    """Settings source over the garden search YAML file; unknown keys are dropped."""

    def __init__(self, settings_cls: type[BaseSettings], paths: Optional[List[Path]] = None):
        super().__init__(settings_cls)
        self._data = load_yaml_config(paths)

    def get_field_value(self, field: FieldInfo, field_name: str) -> Tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, False

    def __call__(self) -> Dict[str, Any]:
        values: Dict[str, Any] = {}
        for field_name, field in self.settings_cls.model_fields.items():
            value, key, _ = self.get_field_value(field, field_name)
            if value is not None:
                values[key] = value
        return values


class Settings(BaseSettings):
    """Application settings."""

    # ---- OpenRouter ----
    openrouter_api_key: Optional[str] = Field(default=None, description="OpenRouter API key")
    openrouter_base_url: str = Field(
        default="https://openrouter.ai/api/v1",
        description="Base URL of the chat-completion API",
    )
    default_model: str = Field(default="openai/gpt-4o-mini", description="Model used by every search stage")
    default_temperature: float = Field(default=1.0, ge=0.0, le=2.0)
    http_timeout: float = Field(default=30.0, ge=1.0, description="Per-request timeout (seconds)")
    max_retries: int = Field(default=3, ge=1, le=10, description="Total attempts per request")
    app_url: str = Field(default="http://localhost", description="Sent as HTTP-Referer")
    app_name: str = Field(default="Garden Journal", description="Sent as X-Title")

    # ---- Search ----
    validation_fail_open: bool = Field(default=VALIDATION_FAIL_OPEN)
    query_min_length: int = Field(default=3, ge=1)
    query_max_length: int = Field(default=500, ge=1)
    analytics_enabled: bool = Field(default=True)

    # ---- Infrastructure ----
    storage_root: str = Field(default=".storage", description="Root directory for analytics records")
    log_dir: str = Field(default="logs", description="Log directory")
    log_level: str = Field(default="DEBUG", description="Level of the garden_search logger")
    log_redact_content: bool = Field(default=False, description="Truncate logged messages")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("openrouter_api_key")
    @classmethod
    def validate_api_key(cls, v: Optional[str]) -> Optional[str]:
        if v and len(v) < 10:
            raise ValueError("API key seems too short")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = str(v).strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSource(settings_cls),
            file_secret_settings,
        )


settings = Settings()
