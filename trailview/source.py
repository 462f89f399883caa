"""Log source backed by the Papertrail event search API"""

import json
import logging
import re
from abc import ABC, abstractmethod
from typing import Any

import requests

from trailview.models.log_entry import LogEntry, parse_timestamp

PAPERTRAIL_URL = "https://papertrailapp.com/api/v1/events/search.json"
TOKEN_HEADER = "X-Papertrail-Token"
LOG_LIMIT = 100
DEFAULT_TIMEOUT = 10.0

UNPARSED_PAYLOAD = '{"error": "Could not parse JSON"}'

# "<level> [<env>]-(<label>):<message>{"
_META_RE = re.compile(r"(\w*?) \[(.*?)\]-\((.*?)\):(.*?)\{")
_PAYLOAD_RE = re.compile(r"loggedObject: '(.*?)'")

logger = logging.getLogger(__name__)


class LogSourceError(Exception):
    """The log source could not be reached or refused the request"""


class LogSource(ABC):
    """Supplies log entries matching a query"""

    @abstractmethod
    def fetch(self, query: str) -> list[LogEntry]:
        """Return the entries matching `query`

        Raises LogSourceError when the source cannot be reached.
        """


class PapertrailSource(LogSource):
    """Searches Papertrail events and parses them into log entries"""

    def __init__(  # pylint: disable=too-many-arguments
        self,
        token: str,
        url: str = PAPERTRAIL_URL,
        limit: int = LOG_LIMIT,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self._url = url
        self._limit = limit
        self._timeout = timeout
        self._session = session or requests.Session()
        self._session.headers[TOKEN_HEADER] = token

    def fetch(self, query: str) -> list[LogEntry]:
        """Search for `query` and parse the matching events"""
        try:
            response = self._session.get(
                self._url,
                params={"q": query, "limit": self._limit},
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            raise LogSourceError(f"Request failed: {e}") from e

        if not response.ok:
            raise LogSourceError(
                f"Search returned {response.status_code} {response.reason}"
            )

        return parse_events(response.text)

    def close(self) -> None:
        """Close the underlying HTTP session"""
        self._session.close()


def parse_events(body: str) -> list[LogEntry]:
    """Parse a search response body; an undecodable body yields no entries"""
    try:
        data = json.loads(body)
    except ValueError:
        logger.warning("Could not decode search response: %.200r", body)
        return []

    if not isinstance(data, dict) or not isinstance(data.get("events"), list):
        logger.warning("Search response has no event list")
        return []

    entries = []
    for event in data["events"]:
        entry = parse_event(event)
        if entry is not None:
            entries.append(entry)
    return entries


def parse_event(event: Any) -> LogEntry | None:
    """Build a LogEntry from one event, or None if its message has no metadata"""
    if not isinstance(event, dict):
        return None

    message = str(event.get("message") or "")
    meta_match = _META_RE.search(message)
    if meta_match is None:
        return None

    payload_match = _PAYLOAD_RE.search(message)
    payload = payload_match.group(1) if payload_match else UNPARSED_PAYLOAD

    level, env, label, text = meta_match.groups()
    generated_at = str(event.get("generated_at") or "")
    return LogEntry(
        env=env,
        level=level,
        label=label,
        message=text,
        payload=payload,
        timestamp=parse_timestamp(generated_at),
        generated_at=generated_at,
        program=str(event.get("program") or ""),
        hostname=str(event.get("hostname") or ""),
    )
