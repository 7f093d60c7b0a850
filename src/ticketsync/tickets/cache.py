"""TicketCache - In-memory store of open tickets and their comments."""

from __future__ import annotations

import logging
from collections.abc import Callable

from ticketsync.tickets.models import CacheEvent, CacheEventType, Comment, Ticket

logger = logging.getLogger(__name__)

CacheListener = Callable[[CacheEvent], None]


def _is_stale(incoming: str | None, cached: str | None) -> bool:
    """Return True if a record updated at `incoming` is older than the cached one."""
    if incoming is None or cached is None:
        return False
    return incoming < cached


class TicketCache:
    """Tickets keyed by issue number, comments keyed by id within their issue.

    Every mutation is applied in one step; a sequence of mutations is not
    atomic as a whole. Listeners are called synchronously for each
    effective change.
    """

    def __init__(self) -> None:
        self._issues: dict[int, Ticket] = {}
        self._comments: dict[int, dict[int, Comment]] = {}
        self._listeners: list[CacheListener] = []

    def subscribe(self, listener: CacheListener) -> None:
        """Register a listener for cache changes."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: CacheListener) -> None:
        """Remove a previously registered listener."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self, event_type: CacheEventType, obj: Ticket | Comment) -> None:
        event = CacheEvent(type=event_type, object=obj)
        for listener in list(self._listeners):
            listener(event)

    # Issues

    def get_issues(self) -> list[Ticket]:
        """Get all cached tickets."""
        return list(self._issues.values())

    def get_issue(self, number: int) -> Ticket | None:
        """Get a cached ticket by issue number."""
        return self._issues.get(number)

    def add_or_update_issue(self, issue: Ticket) -> bool:
        """Insert a ticket or replace the cached one with the same number.

        A ticket equal to, or older than, the cached one is ignored.

        Returns:
            True if the cache changed.
        """
        number = issue.metadata.number
        if number is None:
            logger.warning("Ignoring ticket without issue number")
            return False

        cached = self._issues.get(number)
        if cached is not None and (
            cached == issue or _is_stale(issue.metadata.updated_at, cached.metadata.updated_at)
        ):
            return False

        self._issues[number] = issue
        self._notify(CacheEventType.ADDED if cached is None else CacheEventType.MODIFIED, issue)
        return True

    def remove_issue(self, issue: Ticket) -> bool:
        """Remove a ticket and all of its comments.

        Returns:
            True if the ticket was cached.
        """
        number = issue.metadata.number
        cached = self._issues.pop(number, None) if number is not None else None
        self._comments.pop(number, None)
        if cached is None:
            return False
        self._notify(CacheEventType.DELETED, cached)
        return True

    def get_issue_numbers_for_name_and_namespace(self, name: str, namespace: str) -> list[int]:
        """Get the numbers of all cached tickets of one Shoot."""
        return [
            number
            for number, issue in self._issues.items()
            if issue.metadata.name == name and issue.metadata.namespace == namespace
        ]

    def get_issues_for_namespace(self, namespace: str) -> list[Ticket]:
        """Get all cached tickets of a namespace."""
        return [issue for issue in self._issues.values() if issue.metadata.namespace == namespace]

    # Comments

    def get_comments_for_issue(self, issue_number: int) -> list[Comment]:
        """Get all cached comments of a ticket."""
        return list(self._comments.get(issue_number, {}).values())

    def add_or_update_comment(self, issue_number: int, comment: Comment) -> bool:
        """Insert a comment or replace the cached one with the same id.

        Returns:
            True if the cache changed.
        """
        comment_id = comment.metadata.id
        if comment_id is None:
            logger.warning("Ignoring comment without id on issue #%s", issue_number)
            return False

        comments = self._comments.setdefault(issue_number, {})
        cached = comments.get(comment_id)
        if cached is not None and (
            cached == comment
            or _is_stale(comment.metadata.updated_at, cached.metadata.updated_at)
        ):
            return False

        comments[comment_id] = comment
        self._notify(
            CacheEventType.ADDED if cached is None else CacheEventType.MODIFIED, comment
        )
        return True

    def remove_comment(self, issue_number: int, comment: Comment) -> bool:
        """Remove a comment from a ticket.

        Returns:
            True if the comment was cached.
        """
        comments = self._comments.get(issue_number)
        if not comments:
            return False
        cached = comments.pop(comment.metadata.id, None)
        if not comments:
            del self._comments[issue_number]
        if cached is None:
            return False
        self._notify(CacheEventType.DELETED, cached)
        return True
