"""Request validation for chat-completion calls.

Everything here is pure: the same messages / response format / parameters
always pass or fail the same way, and failures are raised as ValidationError
before the client touches the network.
"""

from numbers import Real
from typing import Any, Callable, Dict, Mapping, Optional, Sequence

from garden_search.domain.exceptions import ValidationError
from garden_search.domain.models import VALID_ROLES, ChatMessage


def _is_number(v: Any) -> bool:
    return isinstance(v, Real) and not isinstance(v, bool)


def _is_int(v: Any) -> bool:
    return isinstance(v, int) and not isinstance(v, bool)


PARAMETER_RULES: Dict[str, Callable[[Any], bool]] = {
    "temperature": lambda v: _is_number(v) and 0 <= v <= 2,
    "top_p": lambda v: _is_number(v) and 0 <= v <= 1,
    "top_k": lambda v: _is_int(v) and v > 0,
    "max_tokens": lambda v: _is_int(v) and v > 0,
    "frequency_penalty": lambda v: _is_number(v) and -2 <= v <= 2,
    "presence_penalty": lambda v: _is_number(v) and -2 <= v <= 2,
    "seed": _is_int,
    "stream": lambda v: isinstance(v, bool),
}


def message_to_mapping(message: Any, index: int) -> Mapping[str, Any]:
    if isinstance(message, ChatMessage):
        return message.to_payload()
    if isinstance(message, Mapping):
        return message
    raise ValidationError(
        code="INVALID_MESSAGE",
        message=f"Message at index {index} must be a mapping or ChatMessage",
        index=index,
    )


def validate_messages(messages: Sequence[Any]) -> None:
    if not messages:
        raise ValidationError(code="EMPTY_MESSAGES", message="Messages cannot be empty")

    for index, raw in enumerate(messages):
        message = message_to_mapping(raw, index)
        role = message.get("role")
        if role is None:
            raise ValidationError(
                code="INVALID_MESSAGE",
                message=f"Message at index {index} missing 'role'",
                index=index,
            )
        if role not in VALID_ROLES:
            raise ValidationError(
                code="INVALID_ROLE",
                message=f"Invalid role {role!r} at index {index}. Must be one of: {', '.join(VALID_ROLES)}",
                index=index,
            )
        content = message.get("content")
        if not isinstance(content, str) or not content.strip():
            raise ValidationError(
                code="INVALID_MESSAGE",
                message=f"Message at index {index} missing or empty 'content'",
                index=index,
            )


def validate_response_format(response_format: Optional[Mapping[str, Any]]) -> None:
    if response_format is None:
        return

    def fail(message: str) -> None:
        raise ValidationError(code="INVALID_RESPONSE_FORMAT", message=message)

    if not isinstance(response_format, Mapping) or response_format.get("type") != "json_schema":
        fail("response_format type must be 'json_schema'")

    json_schema = response_format.get("json_schema")
    if not isinstance(json_schema, Mapping):
        fail("response_format must contain 'json_schema'")

    name = json_schema.get("name")
    if not isinstance(name, str) or not name.strip():
        fail("json_schema must have non-empty 'name'")

    # strict must be the literal True, not merely truthy
    if json_schema.get("strict") is not True:
        fail("json_schema must have 'strict' set to true")

    schema = json_schema.get("schema")
    if not isinstance(schema, Mapping):
        fail("json_schema must contain 'schema' object")

    if schema.get("type") != "object":
        fail("schema type must be 'object'")

    properties = schema.get("properties")
    if not isinstance(properties, Mapping) or not properties:
        fail("schema must contain a non-empty 'properties' object")


def validate_parameters(parameters: Optional[Mapping[str, Any]]) -> None:
    for key, value in (parameters or {}).items():
        rule = PARAMETER_RULES.get(key)
        if rule is not None and not rule(value):
            raise ValidationError(
                code="INVALID_PARAMETER",
                message=f"Invalid value for parameter {key!r}",
                parameter=key,
            )


def validate_request(
    messages: Sequence[Any],
    response_format: Optional[Mapping[str, Any]] = None,
    parameters: Optional[Mapping[str, Any]] = None,
) -> None:
    """Validate a complete request; raises ValidationError on the first violation."""

    validate_messages(messages)
    validate_response_format(response_format)
    validate_parameters(parameters)
