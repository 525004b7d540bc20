"""
Unit tests for the session value codec.
"""

import json

import pytest

from sharedsession.modules.codec import decode, encode
from sharedsession.modules.errors import ValueParseError


def test_encode_produces_utf8_json():
    """Encoded entries are the UTF-8 text of the JSON object."""
    raw = encode("profile", {"name": "Zoë", "age": 37})

    assert isinstance(raw, bytes)
    assert json.loads(raw.decode("utf-8")) == {"name": "Zoë", "age": 37}


@pytest.mark.parametrize(
    "document",
    [
        {},
        {"nested": {"list": [1, 2.5, None, True, "x"], "empty": {}}},
        {"unicode": "日本語 ✓", "escaped": "line\nbreak \"quoted\""},
    ],
)
def test_decode_reverses_encode(document):
    assert decode(encode("entry", document)) == document


def test_encode_rejects_non_object():
    with pytest.raises(ValueParseError) as exc_info:
        encode("numbers", [1, 2, 3])
    assert "numbers" in str(exc_info.value)


def test_encode_rejects_unserializable_values():
    with pytest.raises(ValueParseError):
        encode("bad", {"value": object()})


def test_decode_rejects_invalid_utf8():
    with pytest.raises(ValueParseError) as exc_info:
        decode(b"\xff\xfe{}")
    assert "UTF-8" in str(exc_info.value)


def test_decode_rejects_malformed_json():
    with pytest.raises(ValueParseError):
        decode(b'{"unterminated": ')


def test_decode_rejects_json_that_is_not_an_object():
    with pytest.raises(ValueParseError):
        decode(b"[1, 2]")

    with pytest.raises(ValueParseError):
        decode(b'"just a string"')


def test_parse_error_is_a_value_error():
    """API-level ValueError handling covers codec failures."""
    with pytest.raises(ValueError):
        decode(b"not json")
