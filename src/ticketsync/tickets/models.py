"""Data models for tickets and their comments."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


@dataclass(frozen=True)
class User:
    """The GitHub user who authored an issue or comment."""

    login: str | None = None
    avatar_url: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"login": self.login, "avatar_url": self.avatar_url}


@dataclass(frozen=True)
class Label:
    """A label attached to a ticket."""

    id: int | None = None
    name: str | None = None
    color: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "color": self.color}


@dataclass(frozen=True)
class TicketMetadata:
    """Identity and bookkeeping fields of a ticket."""

    number: int | None = None
    id: int | None = None
    created_at: str | None = None
    updated_at: str | None = None
    state: str | None = None
    namespace: str | None = None  # Parsed from the "[namespace/name]" title prefix
    name: str | None = None


@dataclass(frozen=True)
class TicketData:
    """Displayable content of a ticket."""

    user: User = field(default_factory=User)
    html_url: str | None = None
    body: str | None = None
    comments: int | None = None  # Comment count reported by GitHub
    labels: tuple[Label, ...] = ()
    ticket_title: str | None = None  # Title without the "[namespace/name]" prefix


@dataclass(frozen=True)
class Ticket:
    """A GitHub issue tracked against a Shoot."""

    metadata: TicketMetadata
    data: TicketData
    kind: str = "issue"

    @property
    def number(self) -> int | None:
        return self.metadata.number

    @property
    def is_closed(self) -> bool:
        return self.metadata.state == "closed"

    def to_dict(self) -> dict[str, Any]:
        """Convert to the JSON shape served to the dashboard."""
        return {
            "kind": self.kind,
            "metadata": {
                "id": self.metadata.id,
                "created_at": self.metadata.created_at,
                "updated_at": self.metadata.updated_at,
                "number": self.metadata.number,
                "state": self.metadata.state,
                "namespace": self.metadata.namespace,
                "name": self.metadata.name,
            },
            "data": {
                "user": self.data.user.to_dict(),
                "html_url": self.data.html_url,
                "body": self.data.body,
                "comments": self.data.comments,
                "labels": [label.to_dict() for label in self.data.labels],
                "ticketTitle": self.data.ticket_title,
            },
        }


@dataclass(frozen=True)
class CommentMetadata:
    """Identity fields of a comment, including its parent issue number."""

    id: int | None = None
    number: int | None = None
    created_at: str | None = None
    updated_at: str | None = None
    namespace: str | None = None
    name: str | None = None


@dataclass(frozen=True)
class CommentData:
    """Displayable content of a comment."""

    user: User = field(default_factory=User)
    body: str | None = None
    html_url: str | None = None


@dataclass(frozen=True)
class Comment:
    """A comment on a ticket."""

    metadata: CommentMetadata
    data: CommentData
    kind: str = "comment"

    @property
    def id(self) -> int | None:
        return self.metadata.id

    def to_dict(self) -> dict[str, Any]:
        """Convert to the JSON shape served to the dashboard."""
        return {
            "kind": self.kind,
            "metadata": {
                "id": self.metadata.id,
                "created_at": self.metadata.created_at,
                "updated_at": self.metadata.updated_at,
                "number": self.metadata.number,
                "name": self.metadata.name,
                "namespace": self.metadata.namespace,
            },
            "data": {
                "user": self.data.user.to_dict(),
                "body": self.data.body,
                "html_url": self.data.html_url,
            },
        }


class CloseOutcome(str, Enum):
    """What close_and_remove_ticket did for one issue."""

    CLOSED = "closed"
    ALREADY_CLOSED = "already_closed"


@dataclass
class CloseResult:
    """Outcome of closing a single ticket.

    Exactly one of outcome and error is set.
    """

    number: int
    outcome: CloseOutcome | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class DeleteResult:
    """Per-ticket outcomes of deleting the tickets of a Shoot."""

    results: list[CloseResult] = field(default_factory=list)

    @property
    def succeeded(self) -> list[CloseResult]:
        return [r for r in self.results if r.ok]

    @property
    def failed(self) -> list[CloseResult]:
        return [r for r in self.results if not r.ok]

    def raise_for_failures(self) -> None:
        """Re-raise the first failure, if any."""
        for result in self.results:
            if result.error is not None:
                raise result.error


class CacheEventType(str, Enum):
    """Kinds of change the ticket cache reports."""

    ADDED = "ADDED"
    MODIFIED = "MODIFIED"
    DELETED = "DELETED"


@dataclass(frozen=True)
class CacheEvent:
    """A single effective change of the ticket cache."""

    type: CacheEventType
    object: Ticket | Comment

    @property
    def kind(self) -> str:
        return self.object.kind

    @property
    def namespace(self) -> str | None:
        return self.object.metadata.namespace
