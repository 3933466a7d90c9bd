"""Garden journal search.

A resilient chat-completion client (validation, retry with backoff, typed
errors, strict json_schema replies) and a search pipeline built on it:
relevance gate → entry selection → summary, falling back to keyword search
whenever an AI stage fails.
"""

from garden_search.flows import SearchOrchestrator
from garden_search.providers import OpenRouterClient, create_client
from garden_search.search.fallback import keyword_search

__all__ = ["OpenRouterClient", "SearchOrchestrator", "create_client", "keyword_search"]
