"""OpenRouter chat-completion client.

This module is responsible for:

1. Validating messages, response format and parameters before any I/O.
2. Building the ``/chat/completions`` payload.
3. Sending it with a per-request timeout, retrying NetworkError / ApiError
   with exponential backoff (1s, 2s, 4s, ...).
4. Mapping HTTP failures onto the error taxonomy in domain.exceptions.
5. Parsing the reply into a ChatResult, decoding JSON content when a
   response format was requested.

Authentication (401), rate limiting (429) and 400-family errors are raised
after the first occurrence: resending the same request cannot fix them.
"""

import json
import time
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

import httpx

from garden_search.domain.exceptions import (
    ApiError,
    AuthenticationError,
    IntegrationError,
    InvalidRequestError,
    ModelNotSupportedError,
    NetworkError,
    RateLimitError,
    ValidationError,
)
from garden_search.domain.models import ChatResult, build_response_format
from garden_search.infrastructure.logging.logger import logger
from garden_search.providers.registry import ChatClientConfig
from garden_search.providers.validation import message_to_mapping, validate_request

CHAT_ENDPOINT = "/chat/completions"


class OpenRouterClient:
    """OpenRouter client implementation.

    Instances are long-lived and safe to share: the configuration is frozen and
    the ``with_*`` helpers return a new client instead of mutating this one.
    """

    name = "openrouter"

    def __init__(self, config: ChatClientConfig, sleep: Callable[[float], None] = time.sleep):
        self._config = config
        self._sleep = sleep

    @property
    def config(self) -> ChatClientConfig:
        return self._config

    # ---- configuration overrides ----

    def with_options(self, **changes: Any) -> "OpenRouterClient":
        return OpenRouterClient(self._config.with_changes(**changes), sleep=self._sleep)

    def with_default_model(self, model: str) -> "OpenRouterClient":
        return self.with_options(default_model=model)

    def with_default_temperature(self, temperature: float) -> "OpenRouterClient":
        return self.with_options(default_temperature=temperature)

    def with_timeout(self, seconds: float) -> "OpenRouterClient":
        return self.with_options(timeout=seconds)

    # ---- public calls ----

    def chat(
        self,
        messages: Sequence[Any],
        model: Optional[str] = None,
        response_format: Optional[Mapping[str, Any]] = None,
        parameters: Optional[Mapping[str, Any]] = None,
    ) -> ChatResult:
        """Run one chat-completion call.

        Steps:
        1. Validate the request (no network I/O on failure).
        2. Build the payload; caller parameters override the default temperature.
        3. Send with retry.
        4. Parse the reply, decoding JSON content if a response format was given.
        """

        validate_request(messages, response_format, parameters)
        model = self._config.default_model if model is None else model
        if not isinstance(model, str) or not model.strip():
            raise ValidationError(code="EMPTY_MODEL", message="Model cannot be empty")

        payload = self._build_payload(messages, model, response_format, parameters)
        data = self._send_with_retry(CHAT_ENDPOINT, payload)
        result = self._parse_response(data, expect_json=response_format is not None)
        logger.debug(
            "openrouter.response",
            extra={"extra": {
                "id": result.id,
                "model": result.model,
                "finish_reason": result.finish_reason,
                "tokens_used": result.tokens_used,
            }},
        )
        return result

    def chat_simple(
        self,
        user_message: str,
        system_message: Optional[str] = None,
        model: Optional[str] = None,
    ) -> str:
        messages: List[Dict[str, str]] = []
        if system_message is not None:
            messages.append({"role": "system", "content": system_message})
        messages.append({"role": "user", "content": user_message})

        result = self.chat(messages, model)
        if not isinstance(result.content, str):
            raise ApiError(code="UNEXPECTED_STRUCTURED_RESPONSE", message="Expected text response but got structured content")
        return result.content

    def chat_structured(
        self,
        messages: Sequence[Any],
        model: Optional[str],
        schema_name: str,
        schema: Dict[str, Any],
        parameters: Optional[Mapping[str, Any]] = None,
    ) -> Dict[str, Any]:
        response_format = build_response_format(schema_name, schema)
        # chat() only returns mapping content when a response format is given
        return self.chat(messages, model, response_format, parameters).content

    # ---- transport ----

    def _build_payload(
        self,
        messages: Sequence[Any],
        model: str,
        response_format: Optional[Mapping[str, Any]],
        parameters: Optional[Mapping[str, Any]],
    ) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "model": model,
            "messages": [dict(message_to_mapping(m, i)) for i, m in enumerate(messages)],
            "temperature": self._config.default_temperature,
        }
        if response_format is not None:
            payload["response_format"] = dict(response_format)
        payload.update(parameters or {})
        return payload

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self._config.api_key}",
            "Content-Type": "application/json",
            "HTTP-Referer": self._config.app_url,
            "X-Title": self._config.app_name,
        }

    def _send(self, endpoint: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        logger.debug(
            "openrouter.request",
            extra={"extra": {
                "endpoint": endpoint,
                "model": payload.get("model"),
                "message_count": len(payload.get("messages", [])),
                "has_response_format": "response_format" in payload,
            }},
        )
        try:
            with httpx.Client(timeout=self._config.timeout, trust_env=False) as client:
                resp = client.post(
                    f"{self._config.base_url}{endpoint}",
                    json=payload,
                    headers=self._headers(),
                )
        except httpx.RequestError as e:
            # DNS failure, refused connection, timeout before a response
            raise NetworkError(code="NETWORK_ERROR", message=f"Network error: {e}")

        if resp.status_code >= 300:
            self._raise_for_status(resp)
        try:
            data = resp.json()
        except ValueError:
            raise ApiError(code="INVALID_RESPONSE", message="Response body is not valid JSON", http_status=resp.status_code)
        if not isinstance(data, dict):
            raise ApiError(code="INVALID_RESPONSE", message="Response body is not a JSON object", http_status=resp.status_code)
        return data

    def _send_with_retry(self, endpoint: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        max_retries = self._config.max_retries
        attempt = 0
        while True:
            try:
                return self._send(endpoint, payload)
            except (NetworkError, ApiError) as e:
                attempt += 1
                if attempt >= max_retries:
                    raise
                wait = 2 ** (attempt - 1)
                logger.warning(
                    f"Retrying OpenRouter request (attempt {attempt})",
                    extra={"extra": {"endpoint": endpoint, "code": e.code, "error": e.message, "wait": wait}},
                )
                self._sleep(wait)

    @staticmethod
    def _raise_for_status(resp: httpx.Response) -> None:
        status = resp.status_code
        message = _upstream_message(resp)
        error: IntegrationError
        if status == 401:
            error = AuthenticationError(code="AUTHENTICATION_FAILED", message=f"Authentication failed: {message}", http_status=status)
        elif status == 429:
            error = RateLimitError(code="RATE_LIMIT", message=f"Rate limit exceeded: {message}", http_status=status)
        elif status == 400 and "does not support" in message:
            error = ModelNotSupportedError(code="MODEL_NOT_SUPPORTED", message=message, http_status=status)
        elif status == 400:
            error = InvalidRequestError(code="INVALID_REQUEST", message=message, http_status=status)
        else:
            error = ApiError(code="API_ERROR", message=f"API error: {message}", http_status=status)
        raise error

    # ---- parsing ----

    @staticmethod
    def _parse_response(data: Dict[str, Any], expect_json: bool = False) -> ChatResult:
        """Turn the raw reply into a ChatResult; missing fields default to ""/{}."""

        choices = data.get("choices")
        first = choices[0] if isinstance(choices, list) and choices and isinstance(choices[0], dict) else {}
        message = first.get("message")
        if not isinstance(message, dict):
            message = {}
        content = message.get("content")
        if content is None:
            content = ""

        if expect_json:
            if isinstance(content, str):
                try:
                    content = json.loads(content)
                except json.JSONDecodeError as e:
                    raise ApiError(code="MALFORMED_STRUCTURED_RESPONSE", message=f"Failed to parse JSON response: {e.msg}")
            if not isinstance(content, dict):
                # The endpoint ignored the schema request
                raise ApiError(
                    code="MALFORMED_STRUCTURED_RESPONSE",
                    message=f"Expected a JSON object but got {type(content).__name__}",
                )

        usage = data.get("usage")
        return ChatResult(
            id=data.get("id") or "",
            model=data.get("model") or "",
            content=content,
            usage=usage if isinstance(usage, dict) else {},
            finish_reason=first.get("finish_reason") or "",
            raw=data,
        )


def _upstream_message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text or "Unknown error"
    if isinstance(body, dict):
        err = body.get("error")
        if isinstance(err, dict) and err.get("message"):
            return str(err["message"])
        if isinstance(err, str) and err:
            return err
    return "Unknown error"
