"""Unit tests for ProjectNavigator."""

import pytest

from ticketsync.navigation import ALL_PROJECTS, Project, ProjectNavigator, project_url


def _project_item(name: str) -> dict:
    return {
        "metadata": {"name": name, "namespace": f"garden-{name}"},
        "data": {"owner": "owner"},
    }


def _navigator(*names: str, **kwargs) -> ProjectNavigator:
    return ProjectNavigator([_project_item(name) for name in names], **kwargs)


@pytest.mark.unit
class TestProjectFromDict:
    """Tests for Project.from_dict."""

    def test_from_dict(self) -> None:
        """Name and namespace come from metadata, owner from data."""
        project = Project.from_dict(_project_item("foo"))

        assert project == Project(name="foo", namespace="garden-foo", owner="owner")


@pytest.mark.unit
class TestFilter:
    """Tests for filtering and sorting."""

    def test_filter_input_shown_for_more_than_three_projects(self) -> None:
        """Short lists don't need a filter."""
        assert _navigator("foo", "bar").show_filter is False
        assert _navigator("foo", "bar", "baz").show_filter is False
        assert _navigator("foo", "bar", "baz", "foobar").show_filter is True

    def test_rows_sorted_with_all_projects_first(self) -> None:
        """All Projects leads, projects follow by name."""
        navigator = _navigator("foo", "bar", "fooz", "foobar")

        rows = navigator.rows

        assert len(rows) == 5
        assert rows[0] is ALL_PROJECTS
        assert [p.name for p in rows[1:]] == ["bar", "foo", "foobar", "fooz"]

    def test_filter_puts_exact_match_first(self) -> None:
        """Filtering keeps matches, exact match first and highlighted."""
        navigator = _navigator("foo", "bar", "fooz", "foobar")

        navigator.set_filter("foo")

        rows = navigator.rows
        assert len(rows) == 4
        assert rows[1].name == "foo"
        assert navigator.highlighted_project_name == "foo"
        assert navigator.is_highlighted(rows[1])
        assert not navigator.is_highlighted(rows[0])

    def test_filter_highlights_first_match_without_exact_match(self) -> None:
        """First match is highlighted when nothing matches exactly."""
        navigator = _navigator("foo", "bar", "fooz", "foobar")

        navigator.set_filter("oob")

        assert [p.name for p in navigator.rows[1:]] == ["foobar"]
        assert navigator.highlighted_project().name == "foobar"

    def test_filter_is_case_insensitive(self) -> None:
        """Filter text case doesn't matter."""
        navigator = _navigator("foo", "bar")

        navigator.set_filter("BA")

        assert [p.name for p in navigator.rows[1:]] == ["bar"]

    def test_clearing_filter_highlights_all_projects(self) -> None:
        """Empty filter resets the highlight."""
        navigator = _navigator("foo", "bar")
        navigator.set_filter("foo")

        navigator.set_filter("")

        assert navigator.highlighted_project_name is None
        assert navigator.highlighted_project() is None


@pytest.mark.unit
class TestHighlight:
    """Tests for keyboard highlighting."""

    def test_arrow_keys_move_highlight(self) -> None:
        """Down and up move through the rows."""
        navigator = _navigator("a", "b", "c", "d")

        assert navigator.highlighted_project_name is None
        navigator.highlight_next()
        assert navigator.highlighted_project_name == "a"
        navigator.highlight_next()
        assert navigator.highlighted_project().name == "b"
        navigator.highlight_previous()
        assert navigator.highlighted_project().name == "a"
        navigator.highlight_next()
        navigator.highlight_next()
        assert navigator.highlighted_project().name == "c"
        navigator.highlight_previous()
        assert navigator.highlighted_project().name == "b"

    def test_highlight_stays_in_bounds(self) -> None:
        """Highlight stops at the first and last row."""
        navigator = _navigator("a", "b")

        assert navigator.highlight_previous() == 0
        assert navigator.highlighted_project_name is None
        for _ in range(5):
            index = navigator.highlight_next()

        assert index == 2
        assert navigator.highlighted_project().name == "b"

    def test_enter_returns_highlighted_project(self) -> None:
        """Enter selects the highlighted row."""
        navigator = _navigator("a", "b", "c", "d")

        assert navigator.enter() is None
        navigator.highlight_next()
        assert navigator.enter().name == "a"
        navigator.highlight_next()
        assert navigator.enter().name == "b"

    def test_removed_project_resets_highlight(self) -> None:
        """Highlight falls back to All Projects when its project disappears."""
        navigator = _navigator("a", "b")
        navigator.highlight_next()

        navigator.set_projects([_project_item("b")])

        assert navigator.highlighted_project_name is None


@pytest.mark.unit
class TestLazyRendering:
    """Tests for lazy rendering."""

    def test_only_visible_rows_rendered(self) -> None:
        """Rendering is limited to the visible window."""
        navigator = _navigator("foo", "bar", "fooz", "foobar", "foozz", "foobarz")
        navigator.number_of_visible_projects = 5

        assert len(navigator.rows) == 7
        assert len(navigator.visible_project_list) == 5

    def test_highlight_extends_window(self) -> None:
        """Highlighting past the window renders more rows."""
        navigator = _navigator("foo", "bar", "fooz", "foobar", "foozz", "foobarz")
        navigator.number_of_visible_projects = 5

        for _ in range(6):
            navigator.highlight_next()

        assert len(navigator.visible_project_list) == 7

    def test_scrolling_last_row_into_view_renders_one_more(self) -> None:
        """Only scrolling the last row into view grows the window."""
        navigator = _navigator("foo", "bar", "fooz", "foobar", "foozz", "foobarz")
        navigator.number_of_visible_projects = 5

        assert navigator.on_scroll(list_top=200, list_height=200, last_row_top=300) is True
        assert len(navigator.visible_project_list) == 6

        assert navigator.on_scroll(list_top=200, list_height=200, last_row_top=500) is False
        assert len(navigator.visible_project_list) == 6

        assert navigator.on_scroll(list_top=200, list_height=200, last_row_top=300) is True
        assert len(navigator.visible_project_list) == 7

        assert navigator.on_scroll(list_top=200, list_height=200, last_row_top=300) is False
        assert len(navigator.visible_project_list) == 7

    def test_filter_resets_window(self) -> None:
        """A new filter starts from the initial window size."""
        navigator = _navigator("a", "b", "c", number_of_visible_projects=2)
        navigator.highlight_next()
        navigator.highlight_next()
        assert navigator.number_of_visible_projects == 3

        navigator.set_filter("a")

        assert navigator.number_of_visible_projects == 2


@pytest.mark.unit
def test_project_url() -> None:
    """Routes point at the project's cluster list."""
    assert project_url(Project(name="foo", namespace="garden-foo")) == "/namespace/garden-foo/shoots"
    assert project_url(None) == "/namespace/_all/shoots"
