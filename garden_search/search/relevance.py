"""Relevance gate: is the query about the user's gardening journal?

The gate is an optional safety layer. With ``fail_open`` set (the default
VALIDATION_FAIL_OPEN policy) a failing chat call lets the query through
instead of blocking the user while the remote service is degraded.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from garden_search.config.settings import VALIDATION_FAIL_OPEN
from garden_search.infrastructure.logging.logger import logger
from garden_search.prompts import load_system_prompt
from garden_search.providers.base import ChatClient

VALIDATION_SCHEMA_NAME = "query_validation"

VALIDATION_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "is_valid": {
            "type": "boolean",
            "description": "True if query is about gardening journal entries, false otherwise",
        },
        "reason": {
            "type": "string",
            "description": "Brief explanation of the decision",
        },
    },
    "required": ["is_valid", "reason"],
    "additionalProperties": False,
}


@dataclass(frozen=True)
class QueryValidation:
    is_valid: bool
    reason: str = ""


class RelevanceGate:
    def __init__(self, client: ChatClient, model: Optional[str] = None, fail_open: bool = VALIDATION_FAIL_OPEN):
        self._client = client
        self._model = model
        self.fail_open = fail_open

    def check(self, query: str) -> QueryValidation:
        messages = [
            {"role": "system", "content": load_system_prompt(VALIDATION_SCHEMA_NAME)},
            {"role": "user", "content": f'Query: "{query}"'},
        ]
        try:
            response = self._client.chat_structured(messages, self._model, VALIDATION_SCHEMA_NAME, VALIDATION_SCHEMA)
        except Exception as e:
            if not self.fail_open:
                raise
            logger.warning(
                "Query validation failed, allowing query",
                extra={"extra": {"query": query, "code": getattr(e, "code", type(e).__name__), "error": str(e)}},
            )
            return QueryValidation(is_valid=True, reason=f"validation unavailable: {e}")

        # A reply without is_valid counts as a rejection
        is_valid = response.get("is_valid") is True
        reason = str(response.get("reason") or "")
        logger.info("relevance_gate.decision", extra={"extra": {"is_valid": is_valid, "reason": reason}})
        return QueryValidation(is_valid=is_valid, reason=reason)
