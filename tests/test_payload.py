import pytest

from cargopro.models.payload import (
    EXAMPLE_PAYLOAD_HINT,
    format_payload,
    is_valid_payload_text,
    parse_payload,
)


@pytest.mark.parametrize(
    "payload",
    [
        {"color": "Silver"},
        {"price": 2399.5, "in_stock": True, "tags": ["a", "b"], "extra": None},
        {"nested": {"deep": {"list": [1, {"x": "y"}]}}},
        {"unicode": "café ✅"},
        {},
    ],
)
def test_format_then_parse_returns_same_payload(payload):
    assert parse_payload(format_payload(payload)) == payload


def test_format_uses_two_space_indent():
    assert format_payload({"a": 1}) == '{\n  "a": 1\n}'


def test_format_empty_payload():
    assert format_payload(None) == "{}"
    assert format_payload({}) == "{}"


@pytest.mark.parametrize("text", ["[1, 2]", '"text"', "42", "null", "{not json", "{'a': 1}"])
def test_non_object_json_is_invalid(text):
    assert parse_payload(text) is None
    assert not is_valid_payload_text(text)


def test_blank_text_means_no_payload():
    assert parse_payload("   ") is None
    assert is_valid_payload_text("")
    assert is_valid_payload_text("  \n ")


def test_example_hint_is_valid():
    assert is_valid_payload_text(EXAMPLE_PAYLOAD_HINT)
    assert parse_payload(EXAMPLE_PAYLOAD_HINT)["price"] == 2399
