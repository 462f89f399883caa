"""Input controller for wrapping curses key input to enable testing"""

import curses
from abc import ABC, abstractmethod

from trailview.helpers.curses_utils import Key

NO_KEY = -1


class InputController(ABC):
    """Abstract source of key presses"""

    @abstractmethod
    def get_input(self) -> Key:
        """Get the next key, or NO_KEY if the timeout expired"""

    @abstractmethod
    def set_timeout(self, milliseconds: int) -> None:
        """Set how long get_input waits for a key; negative blocks"""


class CursesInputController(InputController):
    """Reads keys from a curses window"""

    def __init__(self, stdscr) -> None:
        self._stdscr = stdscr
        self._stdscr.keypad(True)

    def get_input(self) -> Key:
        try:
            key = self._stdscr.get_wch()
        except curses.error:
            return NO_KEY
        if isinstance(key, str) and ord(key) < 256:
            return ord(key)
        return key

    def set_timeout(self, milliseconds: int) -> None:
        self._stdscr.timeout(milliseconds)
