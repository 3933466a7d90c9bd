"""Provider and client configuration.

ChatClientConfig is an immutable value: a client never changes its own
configuration, overrides produce a new config (and a new client).
"""

from dataclasses import dataclass, replace
from typing import Any

from garden_search.domain.exceptions import ValidationError


@dataclass(frozen=True)
class ProviderConfig:
    """Static facts about a chat-completion provider."""

    name: str
    base_url: str
    default_model: str
    default_temperature: float


OPENROUTER_CONFIG = ProviderConfig(
    name="openrouter",
    base_url="https://openrouter.ai/api/v1",
    default_model="openai/gpt-4o-mini",
    default_temperature=1.0,
)


@dataclass(frozen=True)
class ChatClientConfig:
    """Everything a client needs, supplied once at construction."""

    api_key: str
    base_url: str = OPENROUTER_CONFIG.base_url
    default_model: str = OPENROUTER_CONFIG.default_model
    default_temperature: float = OPENROUTER_CONFIG.default_temperature
    timeout: float = 30.0
    max_retries: int = 3
    app_url: str = ""
    app_name: str = ""

    def __post_init__(self) -> None:
        if not self.api_key or not self.api_key.strip():
            raise ValidationError(code="MISSING_API_KEY", message="OpenRouter API key is required")
        if not 0 <= self.default_temperature <= 2:
            raise ValidationError(code="INVALID_CONFIG", message="Temperature must be between 0 and 2")
        if self.timeout <= 0:
            raise ValidationError(code="INVALID_CONFIG", message="Timeout must be positive")
        if self.max_retries < 1:
            raise ValidationError(code="INVALID_CONFIG", message="max_retries must be at least 1")

    def with_changes(self, **changes: Any) -> "ChatClientConfig":
        return replace(self, **changes)

    @classmethod
    def from_settings(cls, cfg) -> "ChatClientConfig":
        return cls(
            api_key=getattr(cfg, "openrouter_api_key", None) or "",
            base_url=getattr(cfg, "openrouter_base_url", None) or OPENROUTER_CONFIG.base_url,
            default_model=getattr(cfg, "default_model", None) or OPENROUTER_CONFIG.default_model,
            default_temperature=getattr(cfg, "default_temperature", OPENROUTER_CONFIG.default_temperature),
            timeout=getattr(cfg, "http_timeout", 30.0),
            max_retries=getattr(cfg, "max_retries", 3),
            app_url=getattr(cfg, "app_url", ""),
            app_name=getattr(cfg, "app_name", ""),
        )
