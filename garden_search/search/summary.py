"""Natural-language answer grounded in the selected entries."""

from typing import Optional, Sequence

from garden_search.domain.models import SearchEntry
from garden_search.prompts import load_system_prompt
from garden_search.providers.base import ChatClient

SUMMARY_PROMPT = "search_summary"


def entries_digest(entries: Sequence[SearchEntry]) -> str:
    return "\n\n---\n\n".join(
        f"Date: {e.formatted_date}\nTitle: {e.title}\nContent: {e.content}" for e in entries
    )


class SummaryGenerator:
    def __init__(self, client: ChatClient, model: Optional[str] = None):
        self._client = client
        self._model = model

    def generate(self, query: str, entries: Sequence[SearchEntry]) -> str:
        user_message = (
            f'Question: "{query}"\n\n'
            f"Relevant Journal Entries:\n\n{entries_digest(entries)}\n\n"
            "Please provide a helpful summary answering the user's question."
        )
        return self._client.chat_simple(user_message, load_system_prompt(SUMMARY_PROMPT), self._model)
