"""State of the screen layout and the detail viewport"""

from trailview.formatter import Line
from trailview.helpers.state import Field, State

TITLE_HEIGHT = 3
DETAIL_HEADER_HEIGHT = 3
FOOTER_HEIGHT = 2
FIXED_HEADER_HEIGHT = TITLE_HEIGHT + DETAIL_HEADER_HEIGHT + FOOTER_HEIGHT


class ViewportState(State):
    """Terminal size, pane split and detail pane content"""

    ready = Field[bool](False)
    width = Field[int](0)
    height = Field[int](0)
    list_rows = Field[int](0)
    detail_y = Field[int](0)
    y_offset = Field[int](0)
    content = Field[list[Line]](list)

    @property
    def available_rows(self) -> int:
        """Rows shared by the list and detail panes"""
        return max(0, self.height - FIXED_HEADER_HEIGHT)

    @property
    def detail_height(self) -> int:
        """Rows of the detail pane, whatever the list pane leaves over"""
        return max(0, self.available_rows - self.list_rows)

    @property
    def list_y(self) -> int:
        """First row of the list pane"""
        return TITLE_HEIGHT

    @property
    def detail_header_y(self) -> int:
        """First row of the detail header box"""
        return TITLE_HEIGHT + self.list_rows

    @property
    def footer_y(self) -> int:
        """First row of the footer"""
        return max(0, self.height - FOOTER_HEIGHT)
