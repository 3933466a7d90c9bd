import pytest

from garden_search.domain.exceptions import ValidationError
from garden_search.domain.models import ChatMessage, build_response_format
from garden_search.providers.validation import (
    validate_messages,
    validate_parameters,
    validate_request,
    validate_response_format,
)


SCHEMA = {"type": "object", "properties": {"answer": {"type": "string"}}}


def test_valid_request_passes():
    validate_request(
        [ChatMessage(role="developer", content="rules"), {"role": "user", "content": "hi"}],
        build_response_format("answer", SCHEMA),
        {"temperature": 0.5, "top_p": 1, "top_k": 40, "seed": 7, "stream": False, "provider": {"order": ["x"]}},
    )


def test_all_roles_accepted():
    validate_messages([{"role": r, "content": "x"} for r in ("system", "user", "assistant", "developer", "tool")])


def test_non_mapping_message_rejected():
    with pytest.raises(ValidationError) as exc:
        validate_messages(["just text"])
    assert exc.value.extra["index"] == 0


def test_error_names_the_offending_index():
    with pytest.raises(ValidationError) as exc:
        validate_messages([{"role": "user", "content": "ok"}, {"role": "user", "content": ""}])
    assert "index 1" in exc.value.message


def test_non_string_content_rejected():
    with pytest.raises(ValidationError):
        validate_messages([{"role": "user", "content": ["part"]}])


@pytest.mark.parametrize("strict", [False, "true", 1, None])
def test_strict_must_be_literal_true(strict):
    fmt = build_response_format("answer", SCHEMA)
    fmt["json_schema"]["strict"] = strict
    with pytest.raises(ValidationError):
        validate_response_format(fmt)


def test_missing_strict_rejected():
    fmt = build_response_format("answer", SCHEMA)
    del fmt["json_schema"]["strict"]
    with pytest.raises(ValidationError):
        validate_response_format(fmt)


@pytest.mark.parametrize(
    "fmt",
    [
        {"type": "json_object", "json_schema": {"name": "a", "strict": True, "schema": SCHEMA}},
        {"type": "json_schema"},
        {"type": "json_schema", "json_schema": {"name": "  ", "strict": True, "schema": SCHEMA}},
        {"type": "json_schema", "json_schema": {"strict": True, "schema": SCHEMA}},
        {"type": "json_schema", "json_schema": {"name": "a", "strict": True}},
        {"type": "json_schema", "json_schema": {"name": "a", "strict": True, "schema": {"type": "array", "properties": {"x": {}}}}},
        {"type": "json_schema", "json_schema": {"name": "a", "strict": True, "schema": {"type": "object"}}},
        {"type": "json_schema", "json_schema": {"name": "a", "strict": True, "schema": {"type": "object", "properties": {}}}},
    ],
)
def test_malformed_response_formats(fmt):
    with pytest.raises(ValidationError):
        validate_response_format(fmt)


def test_absent_response_format_is_fine():
    validate_response_format(None)


@pytest.mark.parametrize(
    "params",
    [
        {"temperature": 2.5},
        {"temperature": -0.1},
        {"temperature": "hot"},
        {"temperature": True},
        {"top_p": 1.1},
        {"top_k": 0},
        {"top_k": 2.0},
        {"max_tokens": -5},
        {"max_tokens": True},
        {"frequency_penalty": 3},
        {"presence_penalty": -2.5},
        {"seed": "42"},
        {"stream": "yes"},
    ],
)
def test_out_of_range_parameters(params):
    with pytest.raises(ValidationError) as exc:
        validate_parameters(params)
    assert exc.value.extra["parameter"] == next(iter(params))


def test_boundary_parameters_pass():
    validate_parameters({
        "temperature": 2,
        "top_p": 0,
        "frequency_penalty": -2,
        "presence_penalty": 2,
        "max_tokens": 1,
        "seed": -1,
    })


def test_validation_is_repeatable():
    bad = [{"role": "user", "content": " "}]
    for _ in range(2):
        with pytest.raises(ValidationError):
            validate_request(bad)
