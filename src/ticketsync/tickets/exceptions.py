"""Custom exceptions for ticket handling."""


class TicketError(Exception):
    """Base exception for ticket errors."""


class TicketNotFoundError(TicketError):
    """Ticket with given issue number is not cached."""
