"""Public service functions for the calling layer.

Callers fetch and authorize the user's entries, then hand them in here.
"""

from typing import Any, Dict, Iterable, Optional

from garden_search.config.settings import settings
from garden_search.domain.exceptions import ValidationError
from garden_search.flows.orchestrator import SearchOrchestrator
from garden_search.infrastructure.logging.logger import logger
from garden_search.infrastructure.storage.analytics_store import JsonSearchAnalyticsStore
from garden_search.providers import create_client


_orchestrator: Optional[SearchOrchestrator] = None
_analytics: Optional[JsonSearchAnalyticsStore] = None


def get_default_orchestrator() -> SearchOrchestrator:
    """Return the process-wide orchestrator (singleton)."""
    global _orchestrator
    if _orchestrator is None:
        _orchestrator = SearchOrchestrator(
            create_client(settings),
            model=settings.default_model,
            validation_fail_open=settings.validation_fail_open,
        )
    return _orchestrator


def get_analytics_store() -> JsonSearchAnalyticsStore:
    global _analytics
    if _analytics is None:
        _analytics = JsonSearchAnalyticsStore(root=settings.storage_root)
    return _analytics


def normalize_query(query: Optional[str]) -> str:
    """Trim the query and enforce the configured length bounds."""

    text = (query or "").strip()
    if len(text) < settings.query_min_length:
        raise ValidationError(
            code="INVALID_QUERY",
            message=f"The query must be at least {settings.query_min_length} characters.",
        )
    if len(text) > settings.query_max_length:
        raise ValidationError(
            code="INVALID_QUERY",
            message=f"The query cannot exceed {settings.query_max_length} characters.",
        )
    return text


def search_journal(
    query: str,
    entries: Iterable[Any],
    user_id: Optional[Any] = None,
    orchestrator: Optional[SearchOrchestrator] = None,
) -> Dict[str, Any]:
    """Search the given entries and return the result envelope as a dict.

    Args:
        query: raw user query; trimmed and length-checked
        entries: the user's journal entries, newest first
        user_id: recorded with the search analytics (optional)
        orchestrator: overrides the default orchestrator (optional)

    Raises:
        ValidationError: the query is too short or too long
    """
    text = normalize_query(query)
    result = (orchestrator or get_default_orchestrator()).search(text, entries)
    if settings.analytics_enabled:
        get_analytics_store().record(text, result.count, user_id=user_id)
    logger.info(
        "search_journal.done",
        extra={"extra": {"user_id": user_id, "success": result.success, "count": result.count}},
    )
    return result.to_dict()
