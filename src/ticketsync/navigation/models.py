"""Data models for the project navigation list."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

ALL_PROJECTS_NAMESPACE = "_all"


@dataclass(frozen=True)
class Project:
    """A project shown in the navigation list."""

    name: str
    namespace: str
    owner: str | None = None

    @classmethod
    def from_dict(cls, item: dict[str, Any]) -> Project:
        """Create a project from a {metadata: {name, namespace}, data: {owner}} record."""
        metadata = item.get("metadata") or {}
        data = item.get("data") or {}
        return cls(
            name=metadata.get("name", ""),
            namespace=metadata.get("namespace", ""),
            owner=data.get("owner"),
        )


# First row of every list; highlighting it means "no project selected"
ALL_PROJECTS = Project(name="All Projects", namespace=ALL_PROJECTS_NAMESPACE)
