"""List browser - cursor and window navigation over the fetched entries"""

from trailview.models.browser_state import BrowserState
from trailview.models.log_entry import LogEntry
from trailview.models.viewport_state import ViewportState


class ListBrowser:
    """Moves the cursor through the entries and keeps it inside the visible window"""

    def __init__(self, state: BrowserState, viewport_state: ViewportState) -> None:
        self._state = state
        self._viewport_state = viewport_state

    @property
    def _rows(self) -> int:
        return max(1, self._viewport_state.list_rows)

    def move_up(self) -> None:
        """Move the cursor one entry up, scrolling if it was on the first visible row"""
        if self._state.cursor <= 0:
            return
        if self._state.cursor == self._state.window_offset:
            self._state.window_offset -= 1
        self._state.cursor -= 1

    def move_down(self) -> None:
        """Move the cursor one entry down, scrolling if it leaves the window"""
        if self._state.cursor >= len(self._state.entries) - 1:
            return
        if self._state.cursor - self._state.window_offset >= self._rows - 1:
            self._state.window_offset += 1
        self._state.cursor += 1

    def page_up(self) -> None:
        """Move the cursor one window up"""
        for _ in range(self._rows):
            self.move_up()

    def page_down(self) -> None:
        """Move the cursor one window down"""
        for _ in range(self._rows):
            self.move_down()

    def move_to_top(self) -> None:
        """Move the cursor to the first entry"""
        while self._state.cursor > 0:
            self.move_up()

    def move_to_bottom(self) -> None:
        """Move the cursor to the last entry"""
        while self._state.cursor < len(self._state.entries) - 1:
            self.move_down()

    def toggle_select(self, index: int | None = None) -> None:
        """Mark or unmark an entry, the one under the cursor by default"""
        if index is None:
            if not self._state.entries:
                return
            index = self._state.cursor
        if index in self._state.selected:
            self._state.selected.discard(index)
        else:
            self._state.selected.add(index)

    def visible_slice(self) -> list[LogEntry]:
        """The entries currently inside the list window"""
        start = self._state.window_offset
        rows = max(0, self._viewport_state.list_rows)
        end = min(start + rows, len(self._state.entries))
        return list(self._state.entries[start:end])

    def replace_entries(self, entries: list[LogEntry]) -> None:
        """Swap in a new result set and reset cursor, window and selection"""
        self._state.entries = list(entries)
        self._state.cursor = 0
        self._state.window_offset = 0
        self._state.selected = set()

    def current_entry(self) -> LogEntry | None:
        """The entry under the cursor, None when there are no entries"""
        if not self._state.entries:
            return None
        return self._state.entries[self._state.cursor]

    def keep_cursor_visible(self) -> None:
        """Shift the window by the least amount that shows the cursor again"""
        if self._state.cursor < self._state.window_offset:
            self._state.window_offset = self._state.cursor
        elif self._state.cursor >= self._state.window_offset + self._rows:
            self._state.window_offset = self._state.cursor - self._rows + 1
