"""Mapping of raw GitHub issues and comments to tickets.

All functions here are pure: they never mutate their input and never raise
on malformed input. Fields missing from the raw object end up as None.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from ticketsync.tickets.models import (
    Comment,
    CommentData,
    CommentMetadata,
    Label,
    Ticket,
    TicketData,
    TicketMetadata,
    User,
)

# "[namespace/name] rest of the title"
TITLE_PATTERN = re.compile(r"^\[([a-z0-9-]+)\/([a-z0-9-]+)\]\s*(.*)\Z")


def _get(item: Any, key: str) -> Any:
    if isinstance(item, Mapping):
        return item.get(key)
    return None


def _user(item: Any) -> User:
    user = _get(item, "user")
    return User(login=_get(user, "login"), avatar_url=_get(user, "avatar_url"))


def parse_title(title: str | None) -> tuple[str | None, str | None, str | None]:
    """Split an issue title into namespace, name and the remaining title.

    Titles without a "[namespace/name]" prefix yield no namespace or name,
    and the title unchanged.
    """
    match = TITLE_PATTERN.match(title) if isinstance(title, str) else None
    if match is None:
        return None, None, title if isinstance(title, str) else None
    namespace, name, ticket_title = match.groups()
    return namespace, name, ticket_title


def title_filter(namespace: str, name: str) -> str:
    """Build the title prefix identifying the tickets of a Shoot."""
    return f"[{namespace}/{name}]"


def map_label(raw_label: Any) -> Label:
    return Label(
        id=_get(raw_label, "id"),
        name=_get(raw_label, "name"),
        color=_get(raw_label, "color"),
    )


def map_issue(raw_issue: Any) -> Ticket:
    """Convert a GitHub issue into a Ticket."""
    namespace, name, ticket_title = parse_title(_get(raw_issue, "title"))
    raw_labels = _get(raw_issue, "labels")
    if not isinstance(raw_labels, list | tuple):
        raw_labels = ()

    return Ticket(
        metadata=TicketMetadata(
            id=_get(raw_issue, "id"),
            created_at=_get(raw_issue, "created_at"),
            updated_at=_get(raw_issue, "updated_at"),
            number=_get(raw_issue, "number"),
            state=_get(raw_issue, "state"),
            namespace=namespace,
            name=name,
        ),
        data=TicketData(
            user=_user(raw_issue),
            html_url=_get(raw_issue, "html_url"),
            body=_get(raw_issue, "body"),
            comments=_get(raw_issue, "comments"),
            labels=tuple(map_label(label) for label in raw_labels),
            ticket_title=ticket_title,
        ),
    )


def map_comment(
    issue_number: int,
    name: str | None,
    namespace: str | None,
    raw_comment: Any,
) -> Comment:
    """Convert a GitHub issue comment into a Comment of the given ticket."""
    return Comment(
        metadata=CommentMetadata(
            id=_get(raw_comment, "id"),
            created_at=_get(raw_comment, "created_at"),
            updated_at=_get(raw_comment, "updated_at"),
            number=issue_number,
            name=name,
            namespace=namespace,
        ),
        data=CommentData(
            user=_user(raw_comment),
            body=_get(raw_comment, "body"),
            html_url=_get(raw_comment, "html_url"),
        ),
    )
