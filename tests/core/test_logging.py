"""Tests for logging processors."""

from src.core.context import clear_context, set_request_id, set_user_id
from src.core.logging import add_context_processor, filter_sensitive_data


def test_tokens_are_masked() -> None:
    event = filter_sensitive_data(
        None,
        "info",
        {"event": "login", "access_token": "abcdefghij", "user_id": "user-1"},
    )

    assert event["access_token"] == "ab******ij"
    assert event["user_id"] == "user-1"


def test_short_secrets_fully_masked() -> None:
    event = filter_sensitive_data(None, "info", {"event": "x", "password": "abc"})
    assert event["password"] == "***"


def test_nested_values_are_masked() -> None:
    event = filter_sensitive_data(
        None, "info", {"event": "x", "headers": {"Authorization": "Bearer xyz123"}}
    )
    assert event["headers"]["Authorization"] == "Be*********23"


def test_context_added_without_overriding() -> None:
    set_request_id("req-1")
    set_user_id("user-1")
    try:
        event = add_context_processor(
            None, "info", {"event": "x", "user_id": "explicit"}
        )
    finally:
        clear_context()

    assert event["request_id"] == "req-1"
    assert event["user_id"] == "explicit"
