"""High-level entry point for the AI search pipeline."""

from __future__ import annotations

from typing import Any, Iterable, Optional

from garden_search.config.settings import VALIDATION_FAIL_OPEN
from garden_search.domain.exceptions import ValidationError
from garden_search.domain.models import SearchResult
from garden_search.flows.graph import FallbackSearch, build_search_graph
from garden_search.flows.state import SearchState
from garden_search.infrastructure.logging.logger import logger
from garden_search.providers.base import ChatClient
from garden_search.search.fallback import keyword_search
from garden_search.search.relevance import RelevanceGate
from garden_search.search.selector import EntrySelector
from garden_search.search.summary import SummaryGenerator


class SearchOrchestrator:
    """Runs relevance gate → entry selection → summary over one entry snapshot.

    Stages default to the chat-backed implementations built on ``client``;
    any of them can be swapped out. Every search is independent: nothing
    about a call is kept on the orchestrator.
    """

    def __init__(
        self,
        client: Optional[ChatClient] = None,
        *,
        gate: Optional[RelevanceGate] = None,
        selector: Optional[EntrySelector] = None,
        summarizer: Optional[SummaryGenerator] = None,
        fallback: FallbackSearch = keyword_search,
        model: Optional[str] = None,
        validation_fail_open: bool = VALIDATION_FAIL_OPEN,
    ):
        if client is None and None in (gate, selector, summarizer):
            raise ValidationError(code="MISSING_CLIENT", message="A chat client is required for the default stages")
        self.validation_fail_open = validation_fail_open
        self._gate = gate or RelevanceGate(client, model=model, fail_open=validation_fail_open)
        self._selector = selector or EntrySelector(client, model=model)
        self._summarizer = summarizer or SummaryGenerator(client, model=model)
        self._graph = build_search_graph(
            self._gate,
            self._selector,
            self._summarizer,
            fallback=fallback,
            validation_fail_open=validation_fail_open,
        )

    def run(self, query: str, entries: Optional[Iterable[Any]] = None) -> SearchState:
        """Execute the graph and return its final state."""

        state: SearchState = {
            "query": query,
            "entries": list(entries or []),
            "validation": None,
            "selection": None,
            "summary": None,
            "visited": [],
            "result": None,
        }
        logger.info("search.start", extra={"extra": {"query": query, "entries": len(state["entries"])}})
        final = self._graph.invoke(state)
        logger.info(
            "search.end",
            extra={"extra": {"path": final.get("visited"), "count": final["result"].count}},
        )
        return final

    def search(self, query: str, entries: Optional[Iterable[Any]] = None) -> SearchResult:
        return self.run(query, entries)["result"]
