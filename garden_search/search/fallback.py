"""Keyword fallback search.

Deterministic, in-memory substring matching used whenever the AI pipeline
cannot finish. It must never raise, whatever the entry collection holds.
"""

from typing import Any, Iterable

from garden_search.domain.models import SearchResult, format_entries, read_field


def basic_summary(query: str, count: int, announce_empty: bool = False) -> str:
    if count == 0:
        return f'No entries found matching your query: "{query}"' if announce_empty else ""
    if count == 1:
        return f'Found 1 entry matching your query: "{query}"'
    return f'Found {count} entries matching your query: "{query}"'


def _matches(entry: Any, needle: str) -> bool:
    title = str(read_field(entry, "title") or "").lower()
    content = str(read_field(entry, "content") or "").lower()
    return needle in title or needle in content


def keyword_search(query: str, entries: Iterable[Any], announce_empty: bool = False) -> SearchResult:
    """Keep entries whose title or content contains the query (case-insensitive)."""

    needle = (query or "").lower()
    matched = [e for e in (entries or []) if _matches(e, needle)]
    return SearchResult(
        success=True,
        entries=format_entries(matched),
        summary=basic_summary(query, len(matched), announce_empty),
    )
