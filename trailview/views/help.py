"""Handles help mode drawing"""

from trailview.helpers.curses_utils import Color, Position
from trailview.output_controller import Window

HELP_TEXT = [
    "PAPER TRAIL LOG BROWSER - HELP",
    "",
    "Navigation:",
    "  ↑/↓       - Move up/down",
    "  PgUp/PgDn - Page up/down",
    "  Home/End  - Go to first/last entry",
    "  Space     - Mark/unmark entry",
    "",
    "Payload Pane:",
    "  j/k       - Scroll payload down/up",
    "  +         - Grow payload pane",
    "  -         - Shrink payload pane",
    "",
    "Search:",
    "  /         - Enter a search query",
    "  Enter     - Run the query",
    "  Esc       - Cancel the query",
    "  r         - Run the current query again",
    "",
    "Other:",
    "  h/?       - Show this help",
    "  q/Esc     - Quit",
    "  Ctrl-C    - Quit from anywhere",
    "",
    "Press any key to continue...",
]


class HelpView:  # pylint: disable=too-few-public-methods
    """Draws the help screen over the whole terminal"""

    def draw(self, stdscr: Window) -> None:
        """Draw help screen"""
        height, width = stdscr.getmaxyx()

        stdscr.clear()

        start_row = max(0, (height - len(HELP_TEXT)) // 2)
        x_pos = max(0, width // 4)
        for i, line in enumerate(HELP_TEXT):
            if start_row + i < height - 1:
                color = Color.HEADER if i == 0 else Color.DEFAULT
                stdscr.addstr(Position(start_row + i, x_pos), line, color=color)

        stdscr.refresh()
