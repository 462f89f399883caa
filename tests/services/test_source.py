"""Tests for the Papertrail log source."""

import json
from unittest.mock import Mock

import pytest
import requests

from trailview.source import (
    LOG_LIMIT,
    PAPERTRAIL_URL,
    TOKEN_HEADER,
    UNPARSED_PAYLOAD,
    LogSourceError,
    PapertrailSource,
    parse_event,
    parse_events,
)

MESSAGE = "error [prod]-(billing):charge failed { loggedObject: '{\"amount\": 12}' }"


def _event(message: str = MESSAGE, **extra) -> dict:
    event = {
        "message": message,
        "generated_at": "2021-03-07T09:05:11-07:00",
        "program": "app/web.1",
        "hostname": "web-1",
        "severity": "Error",
    }
    event.update(extra)
    return event


def _response(status_code: int = 200, body: str = "", reason: str = "OK") -> Mock:
    response = Mock(spec=requests.Response)
    response.status_code = status_code
    response.reason = reason
    response.ok = status_code < 400
    response.text = body
    return response


@pytest.fixture(name="session")
def session_fixture() -> Mock:
    """Create a mock requests session"""
    session = Mock(spec=requests.Session)
    session.headers = {}
    return session


def test_parse_event() -> None:
    """Test that the level, env, label, message and payload are extracted."""
    # Act
    entry = parse_event(_event())

    # Assert
    assert entry is not None
    assert entry.level == "error"
    assert entry.env == "prod"
    assert entry.label == "billing"
    assert entry.message == "charge failed "
    assert entry.payload == '{"amount": 12}'
    assert entry.program == "app/web.1"
    assert entry.hostname == "web-1"
    assert entry.timestamp is not None
    assert entry.timestamp.hour == 9


def test_parse_event_without_payload_uses_error_payload() -> None:
    """Test that a message without a logged object gets the fallback payload."""
    # Act
    entry = parse_event(_event("info [dev]-(api):started {"))

    # Assert
    assert entry is not None
    assert entry.payload == UNPARSED_PAYLOAD


@pytest.mark.parametrize(
    "message",
    ["plain syslog line", "info [dev]-(api):no brace", ""],
)
def test_parse_event_skips_messages_without_metadata(message: str) -> None:
    """Test that events without the metadata prefix are skipped."""
    # Assert
    assert parse_event(_event(message)) is None


def test_parse_events_keeps_order_and_skips_unparsed() -> None:
    """Test parsing a whole response body."""
    # Arrange
    body = json.dumps(
        {
            "events": [
                _event("info [dev]-(a):first {"),
                _event("garbage"),
                _event("warning [dev]-(b):second {"),
            ]
        }
    )

    # Act
    entries = parse_events(body)

    # Assert
    assert [entry.label for entry in entries] == ["a", "b"]


@pytest.mark.parametrize("body", ["not json", "", "[1, 2]", '{"events": null}'])
def test_parse_events_degrades_to_empty(body: str) -> None:
    """Test that undecodable bodies give an empty result instead of raising."""
    # Assert
    assert parse_events(body) == []


def test_fetch_sends_query_limit_and_token(session: Mock) -> None:
    """Test the request made for a query."""
    # Arrange
    session.get.return_value = _response(body=json.dumps({"events": [_event()]}))
    source = PapertrailSource("secret", timeout=3.0, session=session)

    # Act
    entries = source.fetch("severity:error")

    # Assert
    assert len(entries) == 1
    assert session.headers[TOKEN_HEADER] == "secret"
    session.get.assert_called_once_with(
        PAPERTRAIL_URL,
        params={"q": "severity:error", "limit": LOG_LIMIT},
        timeout=3.0,
    )


def test_fetch_raises_on_error_status(session: Mock) -> None:
    """Test that a non-success status is reported as a source error."""
    # Arrange
    session.get.return_value = _response(401, reason="Unauthorized")
    source = PapertrailSource("", session=session)

    # Act / Assert
    with pytest.raises(LogSourceError, match="401"):
        source.fetch("")


def test_fetch_raises_on_transport_fault(session: Mock) -> None:
    """Test that connection problems are reported as source errors."""
    # Arrange
    session.get.side_effect = requests.ConnectionError("unreachable")
    source = PapertrailSource("token", session=session)

    # Act / Assert
    with pytest.raises(LogSourceError, match="unreachable"):
        source.fetch("")


def test_fetch_returns_empty_on_malformed_body(session: Mock) -> None:
    """Test that a garbled success response is an empty result."""
    # Arrange
    session.get.return_value = _response(body="<html>oops</html>")
    source = PapertrailSource("token", session=session)

    # Assert
    assert source.fetch("") == []


def test_close_closes_session(session: Mock) -> None:
    """Test that closing the source closes the HTTP session."""
    # Arrange
    source = PapertrailSource("token", session=session)

    # Act
    source.close()

    # Assert
    session.close.assert_called_once()
