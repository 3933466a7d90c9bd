"""Search stages built on the chat client.

- relevance: RelevanceGate (fails open).
- selector: EntrySelector.
- summary: SummaryGenerator.
- fallback: keyword_search, the deterministic safety net.
"""

from garden_search.search.fallback import keyword_search
from garden_search.search.relevance import QueryValidation, RelevanceGate
from garden_search.search.selector import EntrySelection, EntrySelector
from garden_search.search.summary import SummaryGenerator

__all__ = [
    "EntrySelection",
    "EntrySelector",
    "QueryValidation",
    "RelevanceGate",
    "SummaryGenerator",
    "keyword_search",
]
