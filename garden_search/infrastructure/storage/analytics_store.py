import json
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, List, Optional
from uuid import uuid4

from garden_search.config.settings import settings
from garden_search.domain.exceptions import IntegrationError
from garden_search.infrastructure.logging.logger import logger


@dataclass
class SearchAnalytic:
    id: str
    user_id: Optional[Any]
    query: str
    results_count: int
    created_at: datetime


class JsonSearchAnalyticsStore:
    """Append-only JSONL record of searches (query and result count)."""

    def __init__(self, root: str | Path | None = None):
        self._root = Path(root or settings.storage_root).resolve()
        self._path = self._root / "search_analytics.jsonl"

    def record(self, query: str, results_count: int, user_id: Optional[Any] = None) -> Optional[SearchAnalytic]:
        """Append one record; failures are logged and never block the search."""

        item = SearchAnalytic(
            id=f"s-{uuid4().hex}",
            user_id=user_id,
            query=query,
            results_count=int(results_count),
            created_at=datetime.now(timezone.utc),
        )
        payload = asdict(item)
        payload["created_at"] = item.created_at.isoformat().replace("+00:00", "Z")
        try:
            self._root.mkdir(parents=True, exist_ok=True)
            with self._path.open("a", encoding="utf-8") as f:
                f.write(json.dumps(payload, ensure_ascii=False, default=str) + "\n")
        except OSError as e:
            logger.warning(
                "Failed to log search analytics",
                extra={"extra": {"error": str(e), "user_id": user_id}},
            )
            return None
        return item

    def list_records(self) -> List[SearchAnalytic]:
        items: List[SearchAnalytic] = []
        if not self._path.exists():
            return items
        try:
            lines = self._path.read_text(encoding="utf-8").splitlines()
        except OSError as e:
            raise IntegrationError(code="STORE_READ_ERROR", message=str(e))
        for line in lines:
            try:
                data = json.loads(line)
                items.append(
                    SearchAnalytic(
                        id=data["id"],
                        user_id=data.get("user_id"),
                        query=data.get("query") or "",
                        results_count=int(data.get("results_count", 0)),
                        created_at=datetime.fromisoformat(str(data["created_at"]).replace("Z", "+00:00")),
                    )
                )
            except (ValueError, KeyError, TypeError):
                continue
        return items
