"""State of the list browser, search input and status line"""

import enum

from trailview.helpers.state import Field, State
from trailview.models.log_entry import LogEntry


class InputMode(enum.Enum):
    """Where key input is routed"""

    BROWSE = "browse"
    SEARCH = "search"
    HELP = "help"


class BrowserState(State):  # pylint: disable=too-few-public-methods
    """Mutable state of the browsing engine"""

    entries = Field[list[LogEntry]](list)
    cursor = Field[int](0)
    window_offset = Field[int](0)
    selected = Field[set[int]](set)

    input_mode = Field[InputMode](InputMode.BROWSE)
    query_buffer = Field[str]("")
    input_cursor_pos = Field[int](0)

    pending_query = Field[str | None](None)
    last_query = Field[str]("")
    status_message = Field[str]("")
