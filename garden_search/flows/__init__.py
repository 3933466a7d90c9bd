"""Search pipeline as a LangGraph state machine."""

from garden_search.flows.orchestrator import SearchOrchestrator

__all__ = ["SearchOrchestrator"]
