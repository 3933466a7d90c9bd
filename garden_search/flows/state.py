"""State definition for the search graph."""

from __future__ import annotations

from typing import Any, List, Optional, TypedDict

from garden_search.domain.models import SearchResult
from garden_search.flows.outcome import StageOutcome


class SearchState(TypedDict, total=False):
    """State shared across the search graph nodes."""

    query: str
    entries: List[Any]
    validation: Optional[StageOutcome]
    selection: Optional[StageOutcome]
    summary: Optional[StageOutcome]
    visited: List[str]
    result: Optional[SearchResult]
