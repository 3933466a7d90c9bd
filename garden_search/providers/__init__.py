"""Chat-completion integration layer.

- base: the ChatClient protocol the search stages depend on.
- registry: provider defaults and the immutable ChatClientConfig.
- validation: pure request validation.
- openrouter_client: the HTTP implementation.
"""

from typing import Optional

from garden_search.config.settings import settings
from garden_search.providers.base import ChatClient
from garden_search.providers.openrouter_client import OpenRouterClient
from garden_search.providers.registry import ChatClientConfig


def create_client(cfg=None, model: Optional[str] = None) -> ChatClient:
    """Build a client from settings (the module-level settings by default)."""

    config = ChatClientConfig.from_settings(cfg or settings)
    if model:
        config = config.with_changes(default_model=model)
    return OpenRouterClient(config)


__all__ = ["ChatClient", "ChatClientConfig", "OpenRouterClient", "create_client"]
