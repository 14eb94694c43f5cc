"""Tests for JSON sub-field decoding and scalar coercion."""

import logging

import pytest

from qadash.result_pipeline.decoding import (
    decode_json_list,
    decode_json_object,
    format_ratio,
    to_count,
    to_number,
    to_text,
)


def test_decode_json_object_string() -> None:
    """decode_json_object parses a JSON-encoded object."""
    assert decode_json_object('{"hsts": true}', "headers") == {"hsts": True}


def test_decode_json_object_already_decoded() -> None:
    """decode_json_object accepts an already-decoded mapping."""
    headers = {"csp": "default-src 'self'"}
    decoded = decode_json_object(headers, "headers")
    assert decoded == headers
    assert decoded is not headers


@pytest.mark.parametrize("value", [None, "", "   "])
def test_decode_json_object_absent(value: object) -> None:
    """decode_json_object returns an empty dict for absent values."""
    assert decode_json_object(value, "headers") == {}


def test_decode_json_object_malformed(caplog: pytest.LogCaptureFixture) -> None:
    """decode_json_object recovers from malformed JSON and logs it."""
    with caplog.at_level(logging.WARNING):
        assert decode_json_object("{not json", "security_headers") == {}
    assert "Malformed JSON in 'security_headers'" in caplog.text


def test_decode_json_object_wrong_container(caplog: pytest.LogCaptureFixture) -> None:
    """decode_json_object rejects a JSON array."""
    with caplog.at_level(logging.WARNING):
        assert decode_json_object("[1, 2]", "meta_tags") == {}
    assert "Expected a JSON object in 'meta_tags'" in caplog.text


def test_decode_json_list_string() -> None:
    """decode_json_list parses a JSON-encoded array."""
    assert decode_json_list('[{"name": "GA4"}]', "pixels") == [{"name": "GA4"}]


def test_decode_json_list_bytes() -> None:
    """decode_json_list decodes UTF-8 bytes."""
    assert decode_json_list(b'["a"]', "events") == ["a"]


def test_decode_json_list_tuple() -> None:
    """decode_json_list accepts an already-decoded tuple."""
    assert decode_json_list(("a", "b"), "events") == ["a", "b"]


@pytest.mark.parametrize("value", [None, "", "[oops", '{"a": 1}', "42", 42])
def test_decode_json_list_empty_default(value: object) -> None:
    """decode_json_list falls back to an empty list."""
    assert decode_json_list(value, "issues") == []


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (12, 12.0),
        (0.25, 0.25),
        ("3.5", 3.5),
        (None, None),
        (True, None),
        ("fast", None),
        (float("nan"), None),
        (float("inf"), None),
        ([1], None),
    ],
)
def test_to_number(value: object, expected: float | None) -> None:
    """to_number returns finite floats only."""
    assert to_number(value) == expected


def test_to_count() -> None:
    """to_count treats missing counters as zero."""
    assert to_count(None) == 0
    assert to_count("7") == 7
    assert to_count(3.9) == 3
    assert to_count(-2) == -2


def test_to_text() -> None:
    """to_text stringifies scalars and drops containers."""
    assert to_text("A+") == "A+"
    assert to_text(90) == "90"
    assert to_text(None) is None
    assert to_text({"grade": "A"}) is None


@pytest.mark.parametrize(
    ("numerator", "denominator", "places", "scale", "expected"),
    [
        (2, 3, 1, 100, "66.7"),
        (49, 400, 1, 100, "12.3"),
        (1, 1, 1, 100, "100.0"),
        (8, 64, 2, 1, "0.13"),
        (1000, 30.0, 2, 1, "33.33"),
        (0, 5, 2, 1, "0.00"),
    ],
)
def test_format_ratio(
    numerator: float, denominator: float, places: int, scale: int, expected: str
) -> None:
    """format_ratio keeps a fixed number of decimals and rounds ties up."""
    assert format_ratio(numerator, denominator, places, scale=scale) == expected
