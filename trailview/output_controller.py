"""Output controller for wrapping curses operations to enable testing"""

import curses
from abc import ABC, abstractmethod

from trailview.helpers.curses_utils import (
    Color,
    Position,
    Size,
    TextAttribute,
    Viewport,
)


class Window(ABC):
    """Abstract window interface for curses operations"""

    @abstractmethod
    def derwin(self, viewport: Viewport) -> "Window":
        """Create a derived window"""

    @abstractmethod
    def getmaxyx(self) -> Size:
        """Get the window size"""

    @abstractmethod
    def clear(self) -> None:
        """Clear the window"""

    @abstractmethod
    def refresh(self) -> None:
        """Refresh the window"""

    @abstractmethod
    def addstr(
        self,
        position: Position,
        text: str,
        *,
        color: Color | None = None,
        attributes: list[TextAttribute] | None = None,
    ) -> None:
        """Add a string to the window"""

    @abstractmethod
    def move(self, position: Position) -> None:
        """Move the cursor"""


class OutputController(ABC):
    """Abstract output controller interface for curses module operations"""

    @abstractmethod
    def create_main_window(self) -> Window:
        """Create the Window covering the whole terminal"""

    @abstractmethod
    def curs_set(self, visibility: int) -> None:
        """Set cursor visibility"""

    @abstractmethod
    def update_lines_cols(self) -> None:
        """Update LINES and COLS after terminal resize"""

    @abstractmethod
    def get_terminal_size(self) -> Size:
        """Get the terminal size as a Size tuple"""


class CursesWindow(Window):
    """Concrete implementation of Window wrapping a curses window"""

    def __init__(self, curses_window, color_to_pair: dict[Color, int]) -> None:
        self._window = curses_window
        self._color_to_pair = color_to_pair

    def derwin(self, viewport: Viewport) -> Window:
        window = self._window.derwin(
            viewport.height, viewport.width, viewport.y, viewport.x
        )
        return CursesWindow(window, self._color_to_pair)

    def getmaxyx(self) -> Size:
        return Size(*self._window.getmaxyx())

    def clear(self) -> None:
        self._window.erase()

    def refresh(self) -> None:
        self._window.refresh()

    def addstr(
        self,
        position: Position,
        text: str,
        *,
        color: Color | None = None,
        attributes: list[TextAttribute] | None = None,
    ) -> None:
        height, width = self.getmaxyx()
        if not 0 <= position.y < height or not 0 <= position.x < width:
            return
        # curses cannot write the bottom-right cell without moving past it
        room = width - position.x - (1 if position.y == height - 1 else 0)
        text = text[:room]
        if not text:
            return

        attr = 0
        if color is not None:
            attr = self._color_to_pair.get(color, 0)
        if attributes:
            for text_attr in attributes:
                attr |= text_attr.value
        self._window.addstr(position.y, position.x, text, attr)

    def move(self, position: Position) -> None:
        self._window.move(position.y, position.x)


class CursesOutputController(OutputController):
    """Concrete implementation of OutputController wrapping the curses module"""

    def __init__(self, stdscr) -> None:
        self._stdscr = stdscr
        self._color_to_pair: dict[Color, int] = {}
        self._start_color()
        self._use_default_colors()

    @staticmethod
    def _start_color() -> None:
        """Initialize color support"""
        curses.start_color()

    def _use_default_colors(self) -> None:
        """Use default terminal colors"""
        curses.use_default_colors()
        for i, color in enumerate(Color):
            pair_num = i + 1
            curses.init_pair(pair_num, color.value, -1)
            self._color_to_pair[color] = curses.color_pair(pair_num)

    def create_main_window(self) -> Window:
        return CursesWindow(self._stdscr, self._color_to_pair)

    def curs_set(self, visibility: int) -> None:
        curses.curs_set(visibility)

    def update_lines_cols(self) -> None:
        curses.update_lines_cols()

    def get_terminal_size(self) -> Size:
        return Size(*self._stdscr.getmaxyx())
