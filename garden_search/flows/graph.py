"""LangGraph construction and node implementations for the search pipeline.

    validate ──► reject
        │
        ▼
      select ──► no_matches
        │   └──► fallback
        ▼
    summarize ──► fallback
        │
        ▼
      finish
"""

from __future__ import annotations

from typing import Any, Callable, Iterable

from langgraph.graph import END, StateGraph
from langgraph.graph.state import CompiledStateGraph

from garden_search.domain.models import SearchResult
from garden_search.flows.outcome import StageOutcome
from garden_search.flows.state import SearchState
from garden_search.infrastructure.logging.logger import logger
from garden_search.search.fallback import keyword_search
from garden_search.search.relevance import RelevanceGate
from garden_search.search.selector import EntrySelector
from garden_search.search.summary import SummaryGenerator

REJECTION_MESSAGE = "Please ask questions related to your gardening journal."
NO_MATCHES_SUMMARY = "I couldn't find any journal entries matching your query."

FallbackSearch = Callable[[str, Iterable[Any]], SearchResult]


def _enter(state: SearchState, name: str) -> None:
    state.setdefault("visited", []).append(name)


def validate_node(state: SearchState, gate: RelevanceGate) -> SearchState:
    _enter(state, "validating")
    state["validation"] = StageOutcome.capture(gate.check, state["query"])
    return state


def select_node(state: SearchState, selector: EntrySelector) -> SearchState:
    _enter(state, "selecting")
    state["selection"] = StageOutcome.capture(selector.select, state["query"], state["entries"])
    return state


def summarize_node(state: SearchState, summarizer: SummaryGenerator) -> SearchState:
    _enter(state, "summarizing")
    selection = state["selection"].value
    state["summary"] = StageOutcome.capture(summarizer.generate, state["query"], selection.entries)
    return state


def reject_node(state: SearchState) -> SearchState:
    _enter(state, "rejected")
    logger.info("search.rejected", extra={"extra": {"query": state["query"]}})
    state["result"] = SearchResult(success=False, error=REJECTION_MESSAGE)
    return state


def no_matches_node(state: SearchState) -> SearchState:
    _enter(state, "done")
    state["result"] = SearchResult(success=True, summary=NO_MATCHES_SUMMARY)
    return state


def fallback_node(state: SearchState, fallback: FallbackSearch) -> SearchState:
    _enter(state, "fallback")
    failed = state.get("summary") or state.get("selection")
    error = failed.error if failed is not None else None
    logger.error(
        "AI search failed",
        extra={"extra": {
            "query": state["query"],
            "code": getattr(error, "code", type(error).__name__),
            "error": str(error),
        }},
    )
    state["result"] = fallback(state["query"], state["entries"])
    return state


def finish_node(state: SearchState) -> SearchState:
    _enter(state, "done")
    entries = state["selection"].value.entries
    state["result"] = SearchResult(success=True, entries=entries, summary=state["summary"].value)
    return state


def validation_router(fail_open: bool) -> Callable[[SearchState], str]:
    def route(state: SearchState) -> str:
        outcome = state["validation"]
        if not outcome.ok:
            logger.warning(
                "relevance_gate.error",
                extra={"extra": {"fail_open": fail_open, "error": str(outcome.error)}},
            )
            return "select" if fail_open else "reject"
        return "select" if outcome.value.is_valid else "reject"

    return route


def selection_router(state: SearchState) -> str:
    outcome = state["selection"]
    if not outcome.ok:
        return "fallback"
    if not outcome.value.entries:
        return "no_matches"
    return "summarize"


def summary_router(state: SearchState) -> str:
    return "finish" if state["summary"].ok else "fallback"


def build_search_graph(
    gate: RelevanceGate,
    selector: EntrySelector,
    summarizer: SummaryGenerator,
    fallback: FallbackSearch = keyword_search,
    validation_fail_open: bool = True,
) -> CompiledStateGraph:
    graph = StateGraph(SearchState)
    graph.add_node("validate", lambda s: validate_node(s, gate))
    graph.add_node("select", lambda s: select_node(s, selector))
    graph.add_node("summarize", lambda s: summarize_node(s, summarizer))
    graph.add_node("reject", reject_node)
    graph.add_node("no_matches", no_matches_node)
    graph.add_node("fallback", lambda s: fallback_node(s, fallback))
    graph.add_node("finish", finish_node)
    graph.set_entry_point("validate")
    graph.add_conditional_edges(
        "validate",
        validation_router(validation_fail_open),
        {"select": "select", "reject": "reject"},
    )
    graph.add_conditional_edges(
        "select",
        selection_router,
        {"fallback": "fallback", "no_matches": "no_matches", "summarize": "summarize"},
    )
    graph.add_conditional_edges("summarize", summary_router, {"finish": "finish", "fallback": "fallback"})
    for terminal in ("reject", "no_matches", "fallback", "finish"):
        graph.add_edge(terminal, END)
    return graph.compile()
