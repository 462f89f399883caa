"""Main application view - window layout and the event loop"""

import curses
import itertools
import logging

from trailview.fetcher import Fetcher
from trailview.formatter import PayloadFormatter
from trailview.helpers.curses_utils import Color, Position, Size, Viewport
from trailview.input_controller import NO_KEY, InputController
from trailview.models.browser_state import BrowserState, InputMode
from trailview.models.viewport_state import (
    DETAIL_HEADER_HEIGHT,
    FIXED_HEADER_HEIGHT,
    FOOTER_HEIGHT,
    TITLE_HEIGHT,
    ViewportState,
)
from trailview.output_controller import OutputController, Window
from trailview.viewmodels.app import AppModel
from trailview.views.details import DetailsView
from trailview.views.entries import EntriesView
from trailview.views.help import HelpView

POLL_INTERVAL_MS = 100
SPINNER_FRAMES = "⣾⣽⣻⢿⡿⣟⣯⣷"
MIN_WIDTH = 20
TITLE = "Paper Trail"

logger = logging.getLogger(__name__)


class App:  # pylint: disable=too-many-instance-attributes
    """Main application class"""

    def __init__(  # pylint: disable=too-many-arguments,too-many-positional-arguments
        self,
        output_controller: OutputController,
        input_controller: InputController,
        fetcher: Fetcher,
        formatter: PayloadFormatter,
        initial_query: str = "",
    ) -> None:
        self._output = output_controller
        self._input = input_controller
        self._initial_query = initial_query

        self._state = BrowserState()
        self._viewport_state = ViewportState()
        self._model = AppModel(self._state, self._viewport_state, fetcher, formatter)

        self._stdscr = output_controller.create_main_window()
        self._title_win: Window | None = None
        self._footer_win: Window | None = None

        self._entries_view = EntriesView(
            self._state, self._viewport_state, self._model.browser
        )
        self._details_view = DetailsView(
            self._state,
            self._viewport_state,
            self._model.browser,
            self._model.viewport,
        )
        self._help_view = HelpView()

        self._spinner = itertools.cycle(SPINNER_FRAMES)
        self._spinner_frame = next(self._spinner)
        self._needs_layout = True
        self._needs_header_redraw = True
        self._needs_footer_redraw = True

        for field in ["width", "height", "list_rows"]:
            self._viewport_state.register_watcher(field, self._update_needs_layout)
        self._state.register_watcher("input_mode", self._update_needs_layout)
        for field in [
            "entries",
            "cursor",
            "selected",
            "input_mode",
            "query_buffer",
            "input_cursor_pos",
            "pending_query",
            "last_query",
            "status_message",
        ]:
            self._state.register_watcher(field, self._update_needs_footer_redraw)

    @property
    def state(self) -> BrowserState:
        """The browser state"""
        return self._state

    @property
    def viewport_state(self) -> ViewportState:
        """The layout and detail pane state"""
        return self._viewport_state

    def _update_needs_layout(self) -> None:
        self._needs_layout = True

    def _update_needs_footer_redraw(self) -> None:
        self._needs_footer_redraw = True

    def run(self) -> None:
        """Main TUI loop"""
        self._output.curs_set(0)
        self._model.handle_resize(self._output.get_terminal_size())
        self._model.start(self._initial_query)
        self._update_timeout()
        self._draw()

        while True:
            key = self._input.get_input()

            if key == NO_KEY:
                if self._model.loading:
                    self._spinner_frame = next(self._spinner)
                    self._needs_footer_redraw = True
            elif key == curses.KEY_RESIZE:
                self._output.update_lines_cols()
                self._model.handle_resize(self._output.get_terminal_size())
                self._needs_layout = True
            elif not self._model.handle_key(key):
                return

            self._model.poll()
            self._update_timeout()
            self._draw()

            self._state.clear_changes()
            self._viewport_state.clear_changes()

    def _update_timeout(self) -> None:
        self._input.set_timeout(POLL_INTERVAL_MS if self._model.loading else -1)

    def _fits(self) -> bool:
        return (
            self._viewport_state.height > FIXED_HEADER_HEIGHT
            and self._viewport_state.width >= MIN_WIDTH
        )

    def _layout_windows(self) -> None:
        """Create the pane windows for the current split"""
        vs = self._viewport_state
        width = vs.width

        def pane(y: int, height: int) -> Window | None:
            if height <= 0:
                return None
            return self._stdscr.derwin(Viewport(Position(y, 0), Size(height, width)))

        self._stdscr.clear()
        self._stdscr.refresh()
        self._title_win = pane(0, TITLE_HEIGHT)
        self._entries_view.set_window(pane(vs.list_y, vs.list_rows))
        self._details_view.set_windows(
            pane(vs.detail_header_y, DETAIL_HEADER_HEIGHT),
            pane(vs.detail_y, vs.detail_height),
        )
        self._footer_win = pane(vs.footer_y, FOOTER_HEIGHT)
        self._needs_header_redraw = True
        self._needs_footer_redraw = True

    def _draw(self) -> None:
        if self._state.input_mode == InputMode.HELP:
            self._output.curs_set(0)
            self._help_view.draw(self._stdscr)
            self._needs_layout = True
            return

        if not self._fits():
            self._stdscr.clear()
            self._stdscr.addstr(Position(0, 0), "Terminal too small", color=Color.ERROR)
            self._stdscr.refresh()
            self._needs_layout = True
            return

        if self._needs_layout:
            self._layout_windows()
            self._needs_layout = False

        if self._needs_header_redraw:
            self._draw_header()
            self._needs_header_redraw = False

        self._entries_view.draw()
        self._details_view.draw()

        if self._needs_footer_redraw or self._state.input_mode == InputMode.SEARCH:
            self._draw_footer()
            self._needs_footer_redraw = False

    def _draw_header(self) -> None:
        if self._title_win is None:
            return
        _, width = self._title_win.getmaxyx()
        box = "─" * (len(TITLE) + 2)
        self._title_win.clear()
        self._title_win.addstr(Position(0, 0), f"╭{box}╮", color=Color.HEADER)
        self._title_win.addstr(
            Position(1, 0),
            f"│ {TITLE} ├" + "─" * max(0, width - len(box) - 2),
            color=Color.HEADER,
        )
        self._title_win.addstr(Position(2, 0), f"╰{box}╯", color=Color.HEADER)
        self._title_win.refresh()

    def _draw_footer(self) -> None:
        if self._footer_win is None:
            return
        _, width = self._footer_win.getmaxyx()
        self._footer_win.clear()
        self._footer_win.addstr(
            Position(0, 1), self._get_status_line()[: width - 2], color=Color.INFO
        )

        if self._state.input_mode == InputMode.SEARCH:
            prompt = "/"
            visible = self._state.query_buffer[: width - 2 - len(prompt)]
            self._footer_win.addstr(Position(1, 1), prompt + visible)
            self._footer_win.move(
                Position(1, 1 + len(prompt) + self._state.input_cursor_pos)
            )
            self._footer_win.refresh()
            self._output.curs_set(1)
        else:
            self._footer_win.refresh()
            self._output.curs_set(0)

    def _get_status_line(self) -> str:
        status_parts = []
        if self._state.pending_query is not None:
            status_parts.append(
                f"{self._spinner_frame} Searching {self._state.pending_query!r}"
            )
        if self._state.last_query:
            status_parts.append(f"Query: {self._state.last_query}")
        if self._state.entries:
            status_parts.append(
                f"Entry {self._state.cursor + 1}/{len(self._state.entries)}"
            )
        if self._state.selected:
            status_parts.append(f"Marked: {len(self._state.selected)}")
        if self._state.status_message:
            status_parts.append(self._state.status_message)
        status_parts.append("Press 'h' for help")
        return " | ".join(status_parts)
