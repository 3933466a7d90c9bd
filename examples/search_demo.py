"""Minimal demonstration of the journal search pipeline."""

from datetime import date

from garden_search.api.service import search_journal
from garden_search.domain.models import JournalEntry

if __name__ == "__main__":
    entries = [
        JournalEntry(id=2, title="Tomatoes", content="Watered the tomato beds, first fruit setting", entry_date=date(2025, 10, 8)),
        JournalEntry(id=1, title="Roses", content="Pruned the climbing roses back by a third", entry_date=date(2025, 9, 30)),
    ]
    question = "When did I last water the tomatoes?"
    result = search_journal(question, entries)
    print("Query:", question)
    print("Summary:", result["summary"])
    for entry in result["entries"]:
        print(f"- {entry['formatted_date']}: {entry['title']}")
