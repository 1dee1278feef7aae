"""
Tests for error message extraction.
"""

import pytest

from client.errors import DEFAULT_ERROR_MESSAGE, extract_error_message


@pytest.mark.parametrize(
    "payload, transport_text, expected",
    [
        ({"message": "Out of stock", "error": "Conflict"}, "timeout", "Out of stock"),
        ({"error": "Conflict"}, "timeout", "Conflict"),
        ({"message": "", "error": "Conflict"}, None, "Conflict"),
        ({"detail": "ignored"}, "Network Error", "Network Error"),
        (None, "Network Error", "Network Error"),
        ("plain string body", None, DEFAULT_ERROR_MESSAGE),
        ({}, "", DEFAULT_ERROR_MESSAGE),
        (None, None, DEFAULT_ERROR_MESSAGE),
    ],
)
def test_message_precedence(payload, transport_text, expected):
    assert extract_error_message(payload, transport_text) == expected


def test_custom_fallback():
    assert extract_error_message(None, None, fallback="Offer sync failed") == "Offer sync failed"


def test_non_string_error_field_is_stringified():
    assert extract_error_message({"error": 404}) == "404"
