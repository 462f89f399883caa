"""Handles the list pane: one row per entry, cursor and selection markers"""

from trailview.formatter import Segment
from trailview.helpers.curses_utils import Color, Position, TextAttribute
from trailview.models.browser_state import BrowserState
from trailview.models.log_entry import LogEntry, Severity
from trailview.models.viewport_state import ViewportState
from trailview.output_controller import Window
from trailview.viewmodels.browser import ListBrowser
from trailview.views.segments import draw_segments

CURSOR_MARKER = "==>"
SELECTED_MARKER = "*"

SEVERITY_COLORS = {
    Severity.ERROR: Color.ERROR,
    Severity.WARNING: Color.WARNING,
    Severity.INFO: Color.INFO,
    Severity.OTHER: Color.DEFAULT,
}


def entry_segments(entry: LogEntry) -> list[Segment]:
    """The colored one-line summary of an entry"""
    return [
        Segment(f"{entry.date_text} ["),
        Segment(entry.env, Color.HEADER),
        Segment("] - "),
        Segment(f" {entry.level} ", SEVERITY_COLORS[entry.severity]),
        Segment(f" ({entry.label}) ~"),
        Segment(entry.message.replace("\n", "\\n")),
    ]


class EntriesView:
    """Draws the visible slice of the entry list"""

    def __init__(
        self,
        state: BrowserState,
        viewport_state: ViewportState,
        browser: ListBrowser,
    ) -> None:
        self._state = state
        self._browser = browser
        self._window: Window | None = None
        self._needs_redraw = True

        for field in ["entries", "cursor", "window_offset", "selected"]:
            state.register_watcher(field, self.force_redraw)
        for field in ["list_rows", "width", "height"]:
            viewport_state.register_watcher(field, self.force_redraw)

    def force_redraw(self) -> None:
        """Draw on the next call to draw()"""
        self._needs_redraw = True

    def set_window(self, window: Window | None) -> None:
        """Attach the window of the list pane"""
        self._window = window
        self._needs_redraw = True

    def draw(self) -> None:
        """Draw the visible entries if anything changed"""
        if not self._needs_redraw or self._window is None:
            return

        self._window.clear()
        offset = self._state.window_offset
        for row, entry in enumerate(self._browser.visible_slice()):
            self._draw_row(row, offset + row, entry)
        self._window.refresh()
        self._needs_redraw = False

    def _draw_row(self, row: int, index: int, entry: LogEntry) -> None:
        assert self._window is not None
        is_current = index == self._state.cursor
        marker = CURSOR_MARKER if is_current else " " * len(CURSOR_MARKER)
        selected = SELECTED_MARKER if index in self._state.selected else " "
        attributes = [TextAttribute.BOLD] if is_current else None

        self._window.addstr(Position(row, 0), marker, color=Color.SELECTED)
        self._window.addstr(
            Position(row, len(marker)), selected, color=Color.SELECTED
        )
        draw_segments(
            self._window,
            Position(row, len(marker) + 2),
            entry_segments(entry),
            attributes,
        )
