"""Tagged stage results.

Each AI stage runs through ``StageOutcome.capture`` so the graph routers see
either a value or an error, never an exception in flight.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional


@dataclass(frozen=True)
class StageOutcome:
    value: Any = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def capture(cls, func: Callable[..., Any], *args: Any, **kwargs: Any) -> "StageOutcome":
        try:
            return cls(value=func(*args, **kwargs))
        except Exception as exc:
            return cls(error=exc)
