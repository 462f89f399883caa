"""Scrollable detail viewport"""

from trailview.formatter import Line
from trailview.models.viewport_state import ViewportState


class DetailViewport:
    """Line-wise scrolling over the detail pane content"""

    def __init__(self, viewport_state: ViewportState) -> None:
        self._state = viewport_state

    @property
    def max_offset(self) -> int:
        """Largest scroll offset that still fills the pane"""
        return max(0, len(self._state.content) - self._state.detail_height)

    def set_content(self, lines: list[Line]) -> None:
        """Replace the content"""
        self._state.content = list(lines)
        self._state.y_offset = min(self._state.y_offset, self.max_offset)

    def goto_top(self) -> None:
        """Scroll back to the first line"""
        self._state.y_offset = 0

    def line_down(self, n: int = 1) -> None:
        """Scroll down by `n` lines"""
        self._state.y_offset = min(self.max_offset, self._state.y_offset + n)

    def line_up(self, n: int = 1) -> None:
        """Scroll up by `n` lines"""
        self._state.y_offset = max(0, self._state.y_offset - n)

    def visible_lines(self) -> list[Line]:
        """The lines shown in the pane at the current offset"""
        offset = min(self._state.y_offset, self.max_offset)
        return list(self._state.content[offset : offset + self._state.detail_height])
