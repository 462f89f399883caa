"""Application controller - routes events to the components"""

import curses
import logging
from typing import Callable

from trailview.fetcher import Fetcher
from trailview.formatter import FormatError, PayloadFormatter, placeholder_lines
from trailview.helpers.curses_utils import CTRL_C, ENTER_KEYS, ESC, Key, Size
from trailview.helpers.state import MISSING
from trailview.models.browser_state import BrowserState, InputMode
from trailview.models.log_entry import LogEntry
from trailview.models.viewport_state import ViewportState
from trailview.viewmodels.browser import ListBrowser
from trailview.viewmodels.layout import LayoutManager
from trailview.viewmodels.search import SearchController
from trailview.viewmodels.viewport import DetailViewport

logger = logging.getLogger(__name__)


class AppModel:  # pylint: disable=too-many-instance-attributes
    """Dispatches keys, resizes and fetch results, and keeps the detail pane in sync"""

    def __init__(
        self,
        state: BrowserState,
        viewport_state: ViewportState,
        fetcher: Fetcher,
        formatter: PayloadFormatter,
    ) -> None:
        self._state = state
        self._viewport_state = viewport_state
        self._fetcher = fetcher
        self._formatter = formatter

        self.browser = ListBrowser(state, viewport_state)
        self.layout = LayoutManager(viewport_state, self.browser.keep_cursor_visible)
        self.viewport = DetailViewport(viewport_state)
        self.search = SearchController(state, fetcher, self._on_results)

        self._shown_entry: object = MISSING
        self._shown_width: int | None = None
        self._entries_replaced = False

        self._dispatch: dict[InputMode, Callable[[int], bool]] = {
            InputMode.BROWSE: self._handle_browse_key,
            InputMode.SEARCH: self._handle_search_key,
            InputMode.HELP: self._handle_help_key,
        }
        self._browse_keys: dict[int, Callable[[], object]] = {
            curses.KEY_UP: self.browser.move_up,
            curses.KEY_DOWN: self.browser.move_down,
            curses.KEY_PPAGE: self.browser.page_up,
            curses.KEY_NPAGE: self.browser.page_down,
            curses.KEY_HOME: self.browser.move_to_top,
            curses.KEY_END: self.browser.move_to_bottom,
            ord(" "): self.browser.toggle_select,
            ord("j"): self.viewport.line_down,
            ord("k"): self.viewport.line_up,
            ord("-"): self.layout.shrink_detail_pane,
            ord("+"): self.layout.grow_detail_pane,
            ord("="): self.layout.grow_detail_pane,
            ord("/"): self.search.start,
            ord("r"): self.search.refresh,
            ord("h"): self._open_help,
            ord("?"): self._open_help,
        }
        self._browse_keys.update(
            {key: self.browser.toggle_select for key in ENTER_KEYS}
        )

    def start(self, query: str = "") -> None:
        """Submit the initial query"""
        self.search.submit(query)

    def handle_resize(self, size: Size) -> None:
        """Handle a terminal size notification"""
        self.layout.on_resize(size)
        self.sync_detail()

    def handle_key(self, key: Key) -> bool:
        """Dispatch a key press, return False when the application should quit"""
        if key == CTRL_C:
            logger.info("Hard quit")
            return False
        keep_running = self._dispatch[self._state.input_mode](key)
        self.sync_detail()
        return keep_running

    def poll(self, timeout: float = 0) -> bool:
        """Apply completed fetches, return True if one was applied"""
        applied = False
        for result in self._fetcher.poll(timeout):
            applied = self.search.deliver(result) or applied
        if applied:
            self.sync_detail()
        return applied

    @property
    def loading(self) -> bool:
        """Whether a fetch is in flight"""
        return self._state.pending_query is not None

    def sync_detail(self) -> None:
        """Recompute the detail content if the entry, the list or the width changed"""
        entry = self.browser.current_entry()
        width = self.detail_width
        if (
            entry is self._shown_entry
            and width == self._shown_width
            and not self._entries_replaced
        ):
            return

        self._shown_entry = entry
        self._shown_width = width
        self._entries_replaced = False
        self.viewport.goto_top()
        self.viewport.set_content(self._format(entry, width))

    @property
    def detail_width(self) -> int:
        """Width available to the formatted payload"""
        return max(1, self._viewport_state.width - 2)

    def _format(self, entry: LogEntry | None, width: int):
        if entry is None:
            return []
        result = self._formatter.format(entry.payload, width)
        if isinstance(result, FormatError):
            logger.debug("Cannot render payload: %s", result.reason)
            return placeholder_lines()
        return result.lines

    def _on_results(self, entries: list[LogEntry]) -> None:
        self.browser.replace_entries(entries)
        self._entries_replaced = True

    def _handle_browse_key(self, key: Key) -> bool:
        if key in (ord("q"), ESC):
            return False
        action = self._browse_keys.get(key)
        if action is not None:
            action()
        return True

    def _handle_search_key(self, key: Key) -> bool:
        self.search.handle_key(key)
        return True

    def _handle_help_key(self, _: Key) -> bool:
        self._state.input_mode = InputMode.BROWSE
        return True

    def _open_help(self) -> None:
        self._state.input_mode = InputMode.HELP
