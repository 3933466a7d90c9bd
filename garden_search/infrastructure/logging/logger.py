import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from garden_search.config.settings import settings

LOG_FILE = "search.log"
REDACTED_LENGTH = 64


class JsonFormatter(logging.Formatter):
    """One JSON object per line: ts, level, name, msg plus the ``extra`` fields."""

    def __init__(self, redact: bool = False):
        super().__init__()
        self.redact = redact

    def format(self, record: logging.LogRecord) -> str:
        msg = record.getMessage()
        if self.redact:
            msg = (msg or "")[:REDACTED_LENGTH]
        payload = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "name": record.name,
            "msg": msg,
        }
        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            payload.update(extra)
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_logger(
    name: str = "garden_search",
    log_dir: Optional[str | Path] = None,
    level: Optional[str] = None,
) -> logging.Logger:
    """Attach a JSON-lines file handler to ``name`` once; later calls only reset the level."""

    logger = logging.getLogger(name)
    logger.setLevel(level or settings.log_level)
    if logger.handlers:
        return logger
    path = Path(log_dir or settings.log_dir)
    path.mkdir(parents=True, exist_ok=True)
    fh = logging.FileHandler(path / LOG_FILE, encoding="utf-8")
    fh.setFormatter(JsonFormatter(redact=settings.log_redact_content))
    logger.addHandler(fh)
    return logger


logger = setup_logger()
