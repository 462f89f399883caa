"""Curses utility functions"""

import curses
import enum
from typing import NamedTuple

CTRL_C = 3

DEL = 127

ESC = 27

ENTER_KEYS = frozenset({ord("\n"), ord("\r"), curses.KEY_ENTER})


class Position(NamedTuple):
    """A simple position class"""

    y: int
    x: int


class Size(NamedTuple):
    """A simple size class"""

    height: int
    width: int


class Viewport(NamedTuple):
    """A simple viewport class"""

    pos: Position
    size: Size

    @property
    def x(self):
        """Get the x position"""
        return self.pos.x

    @property
    def y(self):
        """Get the y position"""
        return self.pos.y

    @property
    def width(self):
        """Get the width"""
        return self.size.width

    @property
    def height(self):
        """Get the height"""
        return self.size.height


class Color(enum.IntEnum):
    """Enumeration of colors"""

    DEFAULT = curses.COLOR_WHITE
    INFO = curses.COLOR_GREEN
    WARNING = curses.COLOR_YELLOW
    ERROR = curses.COLOR_RED
    DEBUG = curses.COLOR_BLUE
    HEADER = curses.COLOR_CYAN
    SELECTED = curses.COLOR_MAGENTA


class TextAttribute(enum.IntEnum):
    """Enumeration of text attributes"""

    BOLD = curses.A_BOLD


# Key codes for control keys, Latin-1 characters and curses function keys.
# Wider characters come through as one-character strings, since their code
# points overlap the curses function key range.
Key = int | str


def key_char(key: Key) -> str | None:
    """The character a key types, or None for control and function keys"""
    if isinstance(key, str):
        return key if key.isprintable() else None
    if 0 <= key < 256 and chr(key).isprintable():
        return chr(key)
    return None
