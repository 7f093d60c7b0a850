"""Navigation - Filterable, lazily rendered project list."""

from ticketsync.navigation.models import ALL_PROJECTS, Project
from ticketsync.navigation.navigator import (
    DEFAULT_VISIBLE_PROJECTS,
    ProjectNavigator,
    project_url,
)

__all__ = [
    "ALL_PROJECTS",
    "DEFAULT_VISIBLE_PROJECTS",
    "Project",
    "ProjectNavigator",
    "project_url",
]
