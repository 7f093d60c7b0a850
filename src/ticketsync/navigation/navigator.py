"""ProjectNavigator - State behind the dashboard's project selector."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from ticketsync.navigation.models import ALL_PROJECTS, ALL_PROJECTS_NAMESPACE, Project

DEFAULT_VISIBLE_PROJECTS = 10

# The filter input is only offered for lists longer than this
FILTER_THRESHOLD = 3


class ProjectNavigator:
    """Filtered, sorted project list with keyboard highlight and lazy rendering.

    Rows are "All Projects" followed by the projects matching the filter.
    Only the first `number_of_visible_projects` rows are rendered; the
    window grows as the user scrolls or highlights past its end.
    """

    def __init__(
        self,
        projects: Iterable[Project | dict[str, Any]] = (),
        number_of_visible_projects: int = DEFAULT_VISIBLE_PROJECTS,
    ) -> None:
        self.initial_visible_projects = number_of_visible_projects
        self.number_of_visible_projects = number_of_visible_projects
        self.project_filter = ""
        self.highlighted_project_name: str | None = None
        self.projects: list[Project] = []
        self.set_projects(projects)

    def set_projects(self, projects: Iterable[Project | dict[str, Any]]) -> None:
        """Replace the project list, keeping filter and highlight where possible."""
        self.projects = [p if isinstance(p, Project) else Project.from_dict(p) for p in projects]
        if self._highlighted_index() is None:
            self.highlighted_project_name = None

    @property
    def show_filter(self) -> bool:
        """Whether the filter input should be offered."""
        return len(self.projects) > FILTER_THRESHOLD

    @property
    def rows(self) -> list[Project]:
        """All Projects followed by the matching projects.

        An exact name match comes first, the rest is sorted by name.
        """
        term = self.project_filter.strip().lower()
        matching = [p for p in self.projects if term in p.name.lower()]
        matching.sort(key=lambda p: (p.name.lower() != term, p.name))
        return [ALL_PROJECTS, *matching]

    @property
    def visible_project_list(self) -> list[Project]:
        """The rows currently rendered."""
        return self.rows[: self.number_of_visible_projects]

    def _highlighted_index(self) -> int | None:
        """Row index of the highlighted project, or None if it is gone."""
        if self.highlighted_project_name is None:
            return 0
        for index, project in enumerate(self.rows):
            if index and project.name == self.highlighted_project_name:
                return index
        return None

    def highlighted_project(self) -> Project | None:
        """The highlighted project, None when All Projects is highlighted."""
        index = self._highlighted_index()
        if not index:
            return None
        return self.rows[index]

    def is_highlighted(self, project: Project) -> bool:
        if project is ALL_PROJECTS:
            return self.highlighted_project_name is None
        return project.name == self.highlighted_project_name

    def _highlight(self, index: int) -> int:
        rows = self.rows
        index = max(0, min(index, len(rows) - 1))
        self.highlighted_project_name = rows[index].name if index else None
        if index >= self.number_of_visible_projects:
            self.number_of_visible_projects = index + 1
        return index

    def highlight_next(self) -> int:
        """Move the highlight one row down.

        Returns:
            Index of the highlighted row, to scroll it into view.
        """
        return self._highlight((self._highlighted_index() or 0) + 1)

    def highlight_previous(self) -> int:
        """Move the highlight one row up.

        Returns:
            Index of the highlighted row, to scroll it into view.
        """
        return self._highlight((self._highlighted_index() or 0) - 1)

    def set_filter(self, project_filter: str) -> None:
        """Apply new filter text.

        The highlight moves to the exact match, or else the first matching
        project, and the rendered window shrinks back to its initial size.
        """
        self.project_filter = project_filter or ""
        self.number_of_visible_projects = self.initial_visible_projects
        rows = self.rows
        if self.project_filter.strip() and len(rows) > 1:
            self.highlighted_project_name = rows[1].name
        else:
            self.highlighted_project_name = None

    def on_scroll(self, list_top: float, list_height: float, last_row_top: float) -> bool:
        """Render one more row if the last rendered row scrolled into view.

        Args:
            list_top: Top edge of the scrolled list.
            list_height: Visible height of the list.
            last_row_top: Top edge of the last rendered row.

        Returns:
            True if another row was rendered.
        """
        if self.number_of_visible_projects >= len(self.rows):
            return False
        if last_row_top < list_top + list_height:
            self.number_of_visible_projects += 1
            return True
        return False

    def enter(self) -> Project | None:
        """Select the highlighted row.

        Returns:
            The project to navigate to, None for All Projects.
        """
        return self.highlighted_project()


def project_url(project: Project | None) -> str:
    """Route path of a project's cluster list."""
    namespace = project.namespace if project is not None else ALL_PROJECTS_NAMESPACE
    return f"/namespace/{namespace}/shoots"
