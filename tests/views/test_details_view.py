"""Tests for the DetailsView view"""

import pytest

from tests.infra.fakes import make_entries
from tests.infra.mock_output_controller import MockOutputController, MockWindow
from trailview.formatter import Line, Segment
from trailview.helpers.curses_utils import Color, Position, Size, Viewport
from trailview.models.browser_state import BrowserState
from trailview.models.viewport_state import ViewportState
from trailview.viewmodels.browser import ListBrowser
from trailview.viewmodels.viewport import DetailViewport
from trailview.views.details import BOX_LEFT, DetailsView


def _lines(count: int) -> list[Line]:
    return [[Segment(f"line {i}", Color.INFO)] for i in range(count)]


@pytest.fixture(name="state")
def state_fixture() -> BrowserState:
    """Create a browser state holding 3 entries"""
    state = BrowserState()
    state.entries = make_entries(3)
    return state


@pytest.fixture(name="viewport_state")
def viewport_state_fixture() -> ViewportState:
    """Create a viewport state with a 4 row detail pane"""
    viewport_state = ViewportState()
    viewport_state.width = 80
    viewport_state.height = 14
    viewport_state.list_rows = 2
    return viewport_state


@pytest.fixture(name="browser")
def browser_fixture(
    state: BrowserState, viewport_state: ViewportState
) -> ListBrowser:
    """Create a list browser"""
    return ListBrowser(state, viewport_state)


@pytest.fixture(name="viewport")
def viewport_fixture(viewport_state: ViewportState) -> DetailViewport:
    """Create a detail viewport holding 10 lines"""
    viewport = DetailViewport(viewport_state)
    viewport.set_content(_lines(10))
    return viewport


@pytest.fixture(name="output_controller")
def output_controller_fixture() -> MockOutputController:
    """Create a 7x80 screen holding the header and the content"""
    return MockOutputController(Size(7, 80))


@pytest.fixture(name="header_win")
def header_win_fixture(output_controller: MockOutputController) -> MockWindow:
    """The three header rows"""
    window = output_controller.create_main_window().derwin(
        Viewport(Position(0, 0), Size(3, 80))
    )
    assert isinstance(window, MockWindow)
    return window


@pytest.fixture(name="content_win")
def content_win_fixture(output_controller: MockOutputController) -> MockWindow:
    """The four content rows"""
    window = output_controller.create_main_window().derwin(
        Viewport(Position(3, 0), Size(4, 80))
    )
    assert isinstance(window, MockWindow)
    return window


@pytest.fixture(name="view")
def view_fixture(  # pylint: disable=too-many-arguments,too-many-positional-arguments
    state: BrowserState,
    viewport_state: ViewportState,
    browser: ListBrowser,
    viewport: DetailViewport,
    header_win: MockWindow,
    content_win: MockWindow,
) -> DetailsView:
    """Create a details view attached to its windows"""
    view = DetailsView(state, viewport_state, browser, viewport)
    view.set_windows(header_win, content_win)
    return view


def test_header_shows_current_entry(view: DetailsView, header_win: MockWindow) -> None:
    """Test that the header box names the entry under the cursor."""
    # Act
    view.draw()

    # Assert
    lines = header_win.get_all_lines()
    assert lines[0].startswith(BOX_LEFT[0])
    assert lines[1].startswith("│ JSON ├──┤ 2021-3-7 09:05 [prod]")
    assert "(label-0) ~message 0" in lines[1]
    assert lines[2].startswith(BOX_LEFT[2])


def test_header_follows_cursor(
    view: DetailsView, header_win: MockWindow, browser: ListBrowser
) -> None:
    """Test that moving the cursor redraws the header."""
    # Arrange
    view.draw()

    # Act
    browser.move_down()
    view.draw()

    # Assert
    assert "(label-1)" in header_win.get_line(1)


def test_header_without_entries(
    view: DetailsView, header_win: MockWindow, browser: ListBrowser
) -> None:
    """Test that an empty list draws a plain rule in the header."""
    # Arrange
    browser.replace_entries([])

    # Act
    view.draw()

    # Assert
    assert header_win.get_line(1) == "│ JSON ├" + "─" * 72


def test_content_shows_visible_lines(
    view: DetailsView, content_win: MockWindow
) -> None:
    """Test that the content rows show the lines at the scroll offset."""
    # Act
    view.draw()

    # Assert
    assert content_win.get_all_lines() == [" line 0", " line 1", " line 2", " line 3"]
    cell = content_win.get_cell(Position(0, 1))
    assert cell is not None and cell.color == Color.INFO


def test_content_scrolls(
    view: DetailsView, content_win: MockWindow, viewport: DetailViewport
) -> None:
    """Test that scrolling redraws the content from the new offset."""
    # Arrange
    view.draw()

    # Act
    viewport.line_down(6)
    view.draw()

    # Assert
    assert content_win.get_all_lines() == [" line 6", " line 7", " line 8", " line 9"]


def test_unchanged_pane_is_not_redrawn(
    view: DetailsView, header_win: MockWindow, content_win: MockWindow
) -> None:
    """Test that drawing twice without changes refreshes each window once."""
    # Act
    view.draw()
    view.draw()

    # Assert
    assert header_win.refresh_count == 1
    assert content_win.refresh_count == 1


def test_scrolling_does_not_redraw_header(
    view: DetailsView,
    header_win: MockWindow,
    viewport: DetailViewport,
) -> None:
    """Test that scrolling the payload leaves the header alone."""
    # Arrange
    view.draw()

    # Act
    viewport.line_down()
    view.draw()

    # Assert
    assert header_win.refresh_count == 1
