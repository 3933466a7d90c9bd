"""Shared data models for the chat client and the journal search.

- ChatMessage: one role-tagged message of a conversation.
- ChatResult: the parsed, immutable reply of one chat-completion call.
- JournalEntry: a read-only snapshot of a journal entry handed in by the caller.
- SearchEntry / SearchResult: the envelope returned to the calling layer.

The search layer accepts any entry-like record (ORM row, dict, JournalEntry),
so field access goes through ``read_field`` rather than attribute access.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List, Literal, Mapping, Optional, Tuple, Union


# Roles accepted by the chat-completion endpoint
Role = Literal["system", "user", "assistant", "developer", "tool"]
VALID_ROLES: Tuple[str, ...] = ("system", "user", "assistant", "developer", "tool")


@dataclass(frozen=True)
class ChatMessage:
    """One message of a conversation; order in the sequence is significant."""

    role: Role
    content: str

    def to_payload(self) -> Dict[str, str]:
        return {"role": self.role, "content": self.content}


def build_response_format(schema_name: str, schema: Dict[str, Any]) -> Dict[str, Any]:
    """Build a strict json_schema response format for the given object schema."""

    return {
        "type": "json_schema",
        "json_schema": {
            "name": schema_name,
            "strict": True,
            "schema": schema,
        },
    }


@dataclass(frozen=True)
class ChatResult:
    """Result of one chat-completion call.

    - content: plain text, or a decoded mapping when a response format was
      requested and the reply decoded cleanly.
    - usage: the provider's token statistics, as returned.
    - raw: the original response payload, kept for debugging.
    """

    id: str
    model: str
    content: Union[str, Dict[str, Any]]
    usage: Dict[str, Any] = field(default_factory=dict)
    finish_reason: str = ""
    raw: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_structured(self) -> bool:
        return isinstance(self.content, Mapping)

    @property
    def tokens_used(self) -> int:
        return int(self.usage.get("total_tokens", 0) or 0)


@dataclass(frozen=True)
class JournalEntry:
    """Journal entry snapshot; owned by the persistence layer."""

    id: int
    title: str
    content: str
    entry_date: date


def read_field(record: Any, name: str, default: Any = None) -> Any:
    """Read ``name`` from a mapping or an attribute-style record."""

    if isinstance(record, Mapping):
        return record.get(name, default)
    return getattr(record, name, default)


def coerce_date(value: Any) -> Optional[date]:
    """Turn a date, datetime or ISO string into a date; None if impossible."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value:
        try:
            return date.fromisoformat(value[:10])
        except ValueError:
            return None
    return None


def format_long_date(value: date) -> str:
    """``October 8, 2025`` style rendering, without a zero-padded day."""

    return f"{value.strftime('%B')} {value.day}, {value.year}"


@dataclass(frozen=True)
class SearchEntry:
    """A matched entry as rendered by the calling layer."""

    id: Any
    title: str
    content: str
    entry_date: str
    formatted_date: str

    @classmethod
    def from_record(cls, record: Any) -> "SearchEntry":
        raw_date = read_field(record, "entry_date")
        parsed = coerce_date(raw_date)
        if parsed is not None:
            iso, pretty = parsed.isoformat(), format_long_date(parsed)
        else:
            iso, pretty = ("" if raw_date is None else str(raw_date)), ""
        return cls(
            id=read_field(record, "id"),
            title=read_field(record, "title") or "",
            content=read_field(record, "content") or "",
            entry_date=iso,
            formatted_date=pretty,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "entry_date": self.entry_date,
            "formatted_date": self.formatted_date,
        }


@dataclass(frozen=True)
class SearchResult:
    """Search envelope; ``count`` is always derived from ``entries``."""

    success: bool
    entries: Tuple[SearchEntry, ...] = ()
    summary: str = ""
    error: Optional[str] = None

    @property
    def count(self) -> int:
        return len(self.entries)

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "success": self.success,
            "entries": [e.to_dict() for e in self.entries],
            "summary": self.summary,
            "count": self.count,
        }
        if self.error is not None:
            payload["error"] = self.error
        return payload


def format_entries(records: List[Any]) -> Tuple[SearchEntry, ...]:
    return tuple(SearchEntry.from_record(r) for r in records)
