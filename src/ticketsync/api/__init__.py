"""REST API for ticketsync."""

from ticketsync.api.app import app, create_app
from ticketsync.api.models import (
    APIResponse,
    CommentResponse,
    DeleteTicketsResponse,
    TicketResponse,
)

__all__ = [
    "APIResponse",
    "CommentResponse",
    "DeleteTicketsResponse",
    "TicketResponse",
    "app",
    "create_app",
]
