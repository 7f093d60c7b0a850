"""Poller - Periodic sync of open tickets."""

from ticketsync.poller.poller import TicketPoller

__all__ = [
    "TicketPoller",
]
