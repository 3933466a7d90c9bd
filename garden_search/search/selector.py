"""Entry selection: ask the model which journal entries answer the query.

Unlike the relevance gate this stage does not fail open; chat errors
propagate so the orchestrator can fall back to keyword search.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from garden_search.domain.models import SearchEntry, coerce_date, format_entries, read_field
from garden_search.infrastructure.logging.logger import logger
from garden_search.prompts import load_system_prompt
from garden_search.providers.base import ChatClient

SEARCH_SCHEMA_NAME = "entry_search"

SEARCH_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "relevant_entry_ids": {
            "type": "array",
            "description": "IDs of journal entries that are relevant to the query",
            "items": {"type": "integer"},
        },
        "reasoning": {
            "type": "string",
            "description": "Brief explanation of why these entries were selected",
        },
    },
    "required": ["relevant_entry_ids", "reasoning"],
    "additionalProperties": False,
}


@dataclass(frozen=True)
class EntrySelection:
    entries: Tuple[SearchEntry, ...]
    reasoning: str = ""


def entries_context(entries: Sequence[Any]) -> List[Dict[str, Any]]:
    """Compact view of the snapshot sent to the model."""

    context = []
    for entry in entries:
        parsed = coerce_date(read_field(entry, "entry_date"))
        context.append({
            "id": read_field(entry, "id"),
            "title": read_field(entry, "title") or "",
            "content": read_field(entry, "content") or "",
            "date": parsed.isoformat() if parsed else "",
        })
    return context


class EntrySelector:
    def __init__(self, client: ChatClient, model: Optional[str] = None):
        self._client = client
        self._model = model

    def select(self, query: str, entries: Sequence[Any]) -> EntrySelection:
        user_message = 'Search Query: "{}"\n\nJournal Entries:\n{}'.format(
            query,
            json.dumps(entries_context(entries), indent=4, ensure_ascii=False, default=str),
        )
        messages = [
            {"role": "system", "content": load_system_prompt(SEARCH_SCHEMA_NAME)},
            {"role": "user", "content": user_message},
        ]
        response = self._client.chat_structured(messages, self._model, SEARCH_SCHEMA_NAME, SEARCH_SCHEMA)

        raw_ids = response.get("relevant_entry_ids") or []
        if not isinstance(raw_ids, list):
            raw_ids = []
        # Only integer ids count; ids missing from the snapshot are ignored
        wanted = {i for i in raw_ids if isinstance(i, int) and not isinstance(i, bool)}
        matched = [e for e in entries if read_field(e, "id") in wanted]

        reasoning = str(response.get("reasoning") or "")
        logger.info(
            "entry_selector.selected",
            extra={"extra": {"requested": len(raw_ids), "matched": len(matched), "snapshot": len(entries)}},
        )
        return EntrySelection(entries=format_entries(matched), reasoning=reasoning)
