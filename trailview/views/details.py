"""Details pane view - header box with the current entry and its payload"""

from trailview.formatter import Segment
from trailview.helpers.curses_utils import Color, Position
from trailview.models.browser_state import BrowserState
from trailview.models.viewport_state import ViewportState
from trailview.output_controller import Window
from trailview.viewmodels.browser import ListBrowser
from trailview.viewmodels.viewport import DetailViewport
from trailview.views.entries import entry_segments
from trailview.views.segments import draw_segments

BOX_LEFT = ("╭──────╮", "│ JSON ├", "╰──────╯")


class DetailsView:
    """Draws the detail header and the visible part of the formatted payload"""

    def __init__(
        self,
        state: BrowserState,
        viewport_state: ViewportState,
        browser: ListBrowser,
        viewport: DetailViewport,
    ) -> None:
        self._browser = browser
        self._viewport = viewport
        self._header_win: Window | None = None
        self._content_win: Window | None = None
        self._needs_header_redraw = True
        self._needs_content_redraw = True

        for field in ["entries", "cursor"]:
            state.register_watcher(field, self._update_needs_header_redraw)
        for field in ["width", "list_rows"]:
            viewport_state.register_watcher(field, self._update_needs_header_redraw)
        for field in ["content", "y_offset", "width", "height", "list_rows"]:
            viewport_state.register_watcher(field, self._update_needs_content_redraw)

    def _update_needs_header_redraw(self) -> None:
        self._needs_header_redraw = True

    def _update_needs_content_redraw(self) -> None:
        self._needs_content_redraw = True

    def set_windows(
        self, header_win: Window | None, content_win: Window | None
    ) -> None:
        """Attach the header and content windows"""
        self._header_win = header_win
        self._content_win = content_win
        self._needs_header_redraw = True
        self._needs_content_redraw = True

    def draw(self) -> None:
        """Draw whatever part of the pane changed"""
        if self._needs_header_redraw and self._header_win is not None:
            self._draw_header(self._header_win)
            self._needs_header_redraw = False
        if self._needs_content_redraw and self._content_win is not None:
            self._draw_content(self._content_win)
            self._needs_content_redraw = False

    def _draw_header(self, window: Window) -> None:
        window.clear()
        _, width = window.getmaxyx()
        for row, text in enumerate(BOX_LEFT):
            window.addstr(Position(row, 0), text, color=Color.HEADER)

        x_pos = len(BOX_LEFT[1])
        entry = self._browser.current_entry()
        if entry is None:
            window.addstr(
                Position(1, x_pos), "─" * (width - x_pos), color=Color.HEADER
            )
            window.refresh()
            return

        segments = entry_segments(entry)
        text_width = min(
            sum(len(segment.text) for segment in segments), max(0, width - x_pos - 6)
        )
        inner = "─" * (text_width + 1)
        window.addstr(Position(0, x_pos), f"  ╭─{inner}╮", color=Color.HEADER)
        window.addstr(Position(2, x_pos), f"  ╰─{inner}╯", color=Color.HEADER)

        window.addstr(Position(1, x_pos), "──┤ ", color=Color.HEADER)
        draw_segments(window, Position(1, x_pos + 4), _clip(segments, text_width))
        end = x_pos + 4 + text_width
        rule = " ├" + "─" * max(0, width - end - 2)
        window.addstr(Position(1, end), rule, color=Color.HEADER)
        window.refresh()

    def _draw_content(self, window: Window) -> None:
        window.clear()
        for row, line in enumerate(self._viewport.visible_lines()):
            draw_segments(window, Position(row, 1), line)
        window.refresh()


def _clip(segments: list[Segment], width: int) -> list[Segment]:
    clipped = []
    for segment in segments:
        if width <= 0:
            break
        clipped.append(Segment(segment.text[:width], segment.color))
        width -= len(segment.text)
    return clipped
