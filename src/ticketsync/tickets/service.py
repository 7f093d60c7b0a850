"""TicketService - Keeps the ticket cache in line with GitHub."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any, Protocol

from ticketsync.tickets.exceptions import TicketNotFoundError
from ticketsync.tickets.mapper import map_comment, map_issue, title_filter
from ticketsync.tickets.models import CloseOutcome, CloseResult, Comment, DeleteResult, Ticket
from ticketsync.tickets.reconcile import reconcile

if TYPE_CHECKING:
    from ticketsync.tickets.cache import TicketCache

logger = logging.getLogger(__name__)

AUTO_CLOSE_COMMENT = "_[Auto-closed due to Shoot deletion]_"


class IssueSource(Protocol):
    """Interface for the remote issue tracker."""

    async def search_issues(
        self, state: str = ..., title: str | None = ...
    ) -> list[dict[str, Any]]:
        """Search issues by state and title text."""
        ...

    async def get_issue(self, number: int) -> dict[str, Any]:
        """Get a single issue."""
        ...

    async def get_comments(self, number: int) -> list[dict[str, Any]]:
        """Get all comments of an issue."""
        ...

    async def create_comment(self, number: int, body: str) -> Any:
        """Post a comment on an issue."""
        ...

    async def close_issue(self, number: int) -> Any:
        """Close an issue."""
        ...


def _ticket_number(ticket: Ticket) -> int | None:
    return ticket.metadata.number


def _comment_id(comment: Comment) -> int | None:
    return comment.metadata.id


class TicketService:
    """Fetches tickets from GitHub and reconciles them into a TicketCache.

    Remote failures propagate unchanged; nothing is retried. A sync cycle
    assumes it is the only writer of the cache while it runs.
    """

    def __init__(self, source: IssueSource, cache: TicketCache) -> None:
        """Initialize the TicketService.

        Args:
            source: Remote issue tracker (usually a GitHubClient).
            cache: Cache the synced tickets are written to.
        """
        self.source = source
        self.cache = cache

    async def fetch_open_issues(
        self, name: str | None = None, namespace: str | None = None
    ) -> list[Ticket]:
        """Fetch open tickets, optionally only those of one Shoot.

        Args:
            name: Shoot name. Only used together with namespace.
            namespace: Shoot namespace. Only used together with name.

        Returns:
            Mapped tickets in the order GitHub returned them.
        """
        title = None
        if name and namespace:
            title = title_filter(namespace, name)
        issues = await self.source.search_issues(state="open", title=title)
        return [map_issue(issue) for issue in issues]

    async def sync_open_issues(
        self, name: str | None = None, namespace: str | None = None
    ) -> list[Ticket]:
        """Fetch open tickets and make the cache hold exactly those.

        Returns:
            The fetched tickets.
        """
        tickets = await self.fetch_open_issues(name=name, namespace=namespace)

        result = reconcile(self.cache.get_issues(), tickets, key=_ticket_number)
        for ticket in result.upserts:
            self.cache.add_or_update_issue(ticket)
        for ticket in result.removed:
            self.cache.remove_issue(ticket)

        logger.debug(
            "Synced %d open ticket(s): %d new, %d known, %d stale removed",
            len(tickets),
            len(result.added),
            len(result.updated),
            len(result.removed),
        )
        return tickets

    async def close_and_remove_ticket(self, number: int) -> CloseOutcome:
        """Close the ticket with the given number and drop it from the cache.

        Tickets already closed on GitHub are only dropped from the cache.
        Otherwise a comment is posted before the issue is closed; if closing
        fails, the comment stays and the next sync picks the ticket up again.
        """
        ticket = map_issue(await self.source.get_issue(number))

        if ticket.is_closed:
            logger.debug("Ticket #%s already closed. Removing from cache..", number)
            self.cache.remove_issue(ticket)
            return CloseOutcome.ALREADY_CLOSED

        await self.source.create_comment(number, AUTO_CLOSE_COMMENT)
        await self.source.close_issue(number)
        self.cache.remove_issue(ticket)
        return CloseOutcome.CLOSED

    async def _close_one(self, number: int) -> CloseResult:
        try:
            outcome = await self.close_and_remove_ticket(number)
        except Exception as e:
            logger.warning("Failed to close ticket #%s: %s", number, e)
            return CloseResult(number=number, error=e)
        return CloseResult(number=number, outcome=outcome)

    async def delete_tickets_for_resource(self, name: str, namespace: str) -> DeleteResult:
        """Close all cached tickets of a deleted Shoot.

        The tickets are closed concurrently. A failure of one does not stop
        the others; every ticket gets its own result, and tickets closed
        before a failure stay closed.
        """
        numbers = self.cache.get_issue_numbers_for_name_and_namespace(name=name, namespace=namespace)
        if not numbers:
            return DeleteResult()

        logger.debug(
            "Deleting tickets for shoot %s/%s. Affected issue numbers: %s",
            namespace,
            name,
            ", ".join(str(n) for n in numbers),
        )
        results = await asyncio.gather(*(self._close_one(number) for number in numbers))
        return DeleteResult(results=list(results))

    async def fetch_comments(self, number: int) -> list[Comment]:
        """Fetch the comments of a cached ticket.

        Raises:
            TicketNotFoundError: If the ticket is not cached.
        """
        ticket = self.cache.get_issue(number)
        if ticket is None:
            raise TicketNotFoundError(f"Ticket #{number} not found")

        name, namespace = ticket.metadata.name, ticket.metadata.namespace
        raw_comments = await self.source.get_comments(number)
        return [map_comment(number, name, namespace, raw) for raw in raw_comments]

    async def sync_comments(self, number: int) -> list[Comment]:
        """Fetch the comments of a ticket and make the cache hold exactly those.

        Returns:
            The fetched comments.
        """
        comments = await self.fetch_comments(number)

        result = reconcile(self.cache.get_comments_for_issue(number), comments, key=_comment_id)
        for comment in result.upserts:
            self.cache.add_or_update_comment(number, comment)
        for comment in result.removed:
            self.cache.remove_comment(number, comment)

        return comments
