"""Tickets - GitHub issues attached to Shoots, and their cache."""

from ticketsync.tickets.cache import TicketCache
from ticketsync.tickets.exceptions import TicketError, TicketNotFoundError
from ticketsync.tickets.mapper import map_comment, map_issue, map_label, parse_title, title_filter
from ticketsync.tickets.models import (
    CacheEvent,
    CacheEventType,
    CloseOutcome,
    CloseResult,
    Comment,
    DeleteResult,
    Label,
    Ticket,
)
from ticketsync.tickets.reconcile import ReconcileResult, reconcile
from ticketsync.tickets.service import AUTO_CLOSE_COMMENT, IssueSource, TicketService

__all__ = [
    "AUTO_CLOSE_COMMENT",
    "CacheEvent",
    "CacheEventType",
    "CloseOutcome",
    "CloseResult",
    "Comment",
    "DeleteResult",
    "IssueSource",
    "Label",
    "ReconcileResult",
    "Ticket",
    "TicketCache",
    "TicketError",
    "TicketNotFoundError",
    "TicketService",
    "map_comment",
    "map_issue",
    "map_label",
    "parse_title",
    "reconcile",
    "title_filter",
]
