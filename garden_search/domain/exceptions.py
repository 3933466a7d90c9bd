"""Error taxonomy for the chat-completion integration.

Every failure the client produces derives from IntegrationError so that the
search layer (and any API/UI layer above it) can catch one type and still
inspect the precise kind, code and upstream status.
"""

from typing import Optional


class IntegrationError(Exception):
    """Base class of the integration error hierarchy.

    Attributes:
        code: machine readable error code (e.g. "RATE_LIMIT").
        message: human readable description.
        http_status: upstream HTTP status code, when one was received.
        extra: additional context (endpoint, attempt, field name, ...).
    """

    retryable = False

    def __init__(self, code: str, message: str, http_status: Optional[int] = None, **extra):
        self.code = code
        self.message = message
        self.http_status = http_status
        self.extra = extra
        super().__init__(message)


class ValidationError(IntegrationError):
    """Malformed request shape or configuration, raised before any network I/O."""


class AuthenticationError(IntegrationError):
    """The endpoint rejected the API key (HTTP 401)."""


class RateLimitError(IntegrationError):
    """HTTP 429. Terminal for the current call."""


class InvalidRequestError(IntegrationError):
    """HTTP 400 for a request the endpoint cannot process."""


class ModelNotSupportedError(InvalidRequestError):
    """HTTP 400 where the model lacks a requested capability."""


class NetworkError(IntegrationError):
    """Connection, DNS or timeout failure before a response arrived."""

    retryable = True


class ApiError(IntegrationError):
    """Any other non-2xx status, or a reply the client cannot decode."""

    retryable = True
