"""Search controller - query input and the refetch it triggers"""

import curses
import enum
import itertools
import logging
from typing import Callable

from trailview.fetcher import Fetcher, FetchResult
from trailview.helpers.curses_utils import DEL, ENTER_KEYS, ESC, Key, key_char
from trailview.models.browser_state import BrowserState, InputMode
from trailview.models.log_entry import LogEntry

logger = logging.getLogger(__name__)


class SearchPhase(enum.Enum):
    """Phases of the search state machine"""

    IDLE = "idle"
    EDITING = "editing"
    SUBMITTING = "submitting"


class SearchController:
    """Edits the query, submits it to the fetcher and applies the latest result"""

    def __init__(
        self,
        state: BrowserState,
        fetcher: Fetcher,
        on_results: Callable[[list[LogEntry]], None],
    ) -> None:
        self._state = state
        self._fetcher = fetcher
        self._on_results = on_results
        self._request_ids = itertools.count(1)
        self._latest_request: int | None = None

    @property
    def phase(self) -> SearchPhase:
        """Current phase, derived from the input mode and the pending fetch"""
        if self._state.input_mode == InputMode.SEARCH:
            return SearchPhase.EDITING
        if self._state.pending_query is not None:
            return SearchPhase.SUBMITTING
        return SearchPhase.IDLE

    def start(self) -> None:
        """Enter query editing with an empty buffer"""
        self._state.input_mode = InputMode.SEARCH
        self._state.query_buffer = ""
        self._state.input_cursor_pos = 0

    def handle_key(self, key: Key) -> None:
        """Edit the query buffer; Enter submits, Escape cancels"""
        buffer = self._state.query_buffer
        pos = self._state.input_cursor_pos

        if key in ENTER_KEYS:
            self.confirm()
        elif key == ESC:
            self._finish_editing()
        elif key in (curses.KEY_BACKSPACE, DEL, ord("\b")):
            if pos > 0:
                self._state.query_buffer = buffer[: pos - 1] + buffer[pos:]
                self._state.input_cursor_pos = pos - 1
        elif key == curses.KEY_DC:
            self._state.query_buffer = buffer[:pos] + buffer[pos + 1 :]
        elif key == curses.KEY_LEFT:
            self._state.input_cursor_pos = max(0, pos - 1)
        elif key == curses.KEY_RIGHT:
            self._state.input_cursor_pos = min(len(buffer), pos + 1)
        elif key == curses.KEY_HOME:
            self._state.input_cursor_pos = 0
        elif key == curses.KEY_END:
            self._state.input_cursor_pos = len(buffer)
        else:
            char = key_char(key)
            if char is not None:
                self._state.query_buffer = buffer[:pos] + char + buffer[pos:]
                self._state.input_cursor_pos = pos + 1

    def confirm(self) -> None:
        """Submit the query buffer and return focus to the list"""
        query = self._state.query_buffer
        self._finish_editing()
        self.submit(query)

    def submit(self, query: str) -> None:
        """Send `query` to the fetcher; any earlier request becomes stale"""
        request_id = next(self._request_ids)
        self._latest_request = request_id
        self._state.pending_query = query
        logger.info("Submitting search %d: %r", request_id, query)
        self._fetcher.submit(request_id, query)

    def refresh(self) -> None:
        """Run the query currently on screen again"""
        self.submit(self._state.last_query)

    def deliver(self, result: FetchResult) -> bool:
        """Apply a fetch result if it belongs to the latest search"""
        if result.request_id != self._latest_request:
            logger.info(
                "Discarding stale result of request %d (%r)",
                result.request_id,
                result.query,
            )
            return False

        self._latest_request = None
        self._state.pending_query = None
        self._state.last_query = result.query
        if result.error:
            self._state.status_message = f"Search failed: {result.error}"
        elif not result.entries:
            self._state.status_message = "No results"
        else:
            self._state.status_message = f"{len(result.entries)} results"
        self._on_results(result.entries)
        return True

    def _finish_editing(self) -> None:
        self._state.query_buffer = ""
        self._state.input_cursor_pos = 0
        self._state.input_mode = InputMode.BROWSE
