from datetime import date

from garden_search.domain.models import JournalEntry
from garden_search.search.fallback import basic_summary, keyword_search


ENTRIES = [
    JournalEntry(id=1, title="Tomatoes", content="watered", entry_date=date(2025, 10, 8)),
    JournalEntry(id=2, title="Roses", content="pruned", entry_date=date(2025, 9, 30)),
]


def test_single_match():
    res = keyword_search("tomato", ENTRIES)
    assert res.success
    assert res.count == 1
    assert [e.id for e in res.entries] == [1]
    assert res.entries[0].formatted_date == "October 8, 2025"
    assert '"tomato"' in res.summary
    assert res.summary == 'Found 1 entry matching your query: "tomato"'


def test_matches_content_case_insensitively():
    res = keyword_search("PRUNED", ENTRIES)
    assert [e.id for e in res.entries] == [2]
    assert "PRUNED" in res.summary


def test_plural_summary_keeps_snapshot_order():
    entries = ENTRIES + [JournalEntry(id=3, title="More tomatoes", content="", entry_date=date(2025, 8, 1))]
    res = keyword_search("tomato", entries)
    assert [e.id for e in res.entries] == [1, 3]
    assert res.summary == 'Found 2 entries matching your query: "tomato"'


def test_no_match_summary():
    res = keyword_search("cucumber", ENTRIES)
    assert res.success
    assert res.count == 0
    assert res.summary == ""
    announced = keyword_search("cucumber", ENTRIES, announce_empty=True)
    assert announced.summary == 'No entries found matching your query: "cucumber"'


def test_empty_collection():
    for query in ("tomato", "x", "a much longer question about roses"):
        res = keyword_search(query, [])
        assert res.success
        assert res.entries == ()
        assert res.count == 0


def test_tolerates_loose_records():
    entries = [
        {"id": 7, "title": None, "content": "Mulched the tomato patch", "entry_date": "2025-06-01"},
        {"id": 8, "title": "Tomato", "content": None, "entry_date": "not a date"},
        {"id": 9},
    ]
    res = keyword_search("tomato", entries)
    assert [e.id for e in res.entries] == [7, 8]
    assert res.entries[0].entry_date == "2025-06-01"
    assert res.entries[0].formatted_date == "June 1, 2025"
    assert res.entries[1].entry_date == "not a date"
    assert res.entries[1].formatted_date == ""


def test_to_dict_envelope():
    payload = keyword_search("tomato", ENTRIES).to_dict()
    assert payload["count"] == len(payload["entries"]) == 1
    assert payload["entries"][0]["entry_date"] == "2025-10-08"
    assert "error" not in payload


def test_basic_summary_wording():
    assert basic_summary("q", 0) == ""
    assert basic_summary("q", 1).startswith("Found 1 entry")
    assert basic_summary("q", 5).startswith("Found 5 entries")
