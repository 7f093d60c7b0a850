"""Pydantic models for REST API."""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from ticketsync.tickets import CloseOutcome

T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    """Standard API response wrapper."""

    data: T | None = None
    error: str | None = None


# Ticket models


class UserResponse(BaseModel):
    """Author of a ticket or comment."""

    login: str | None = None
    avatar_url: str | None = None


class LabelResponse(BaseModel):
    """Response model for a ticket label."""

    id: int | None = None
    name: str | None = None
    color: str | None = None


class TicketMetadataResponse(BaseModel):
    id: int | None = None
    created_at: str | None = None
    updated_at: str | None = None
    number: int | None = None
    state: str | None = None
    namespace: str | None = None
    name: str | None = None


class TicketDataResponse(BaseModel):
    user: UserResponse
    html_url: str | None = None
    body: str | None = None
    comments: int | None = None
    labels: list[LabelResponse] = []
    ticketTitle: str | None = None  # noqa: N815


class TicketResponse(BaseModel):
    """Response model for a ticket."""

    kind: str
    metadata: TicketMetadataResponse
    data: TicketDataResponse


def ticket_to_response(ticket: Any) -> TicketResponse:
    """Convert a Ticket to TicketResponse."""
    return TicketResponse.model_validate(ticket.to_dict())


# Comment models


class CommentMetadataResponse(BaseModel):
    id: int | None = None
    created_at: str | None = None
    updated_at: str | None = None
    number: int | None = None
    name: str | None = None
    namespace: str | None = None


class CommentDataResponse(BaseModel):
    user: UserResponse
    body: str | None = None
    html_url: str | None = None


class CommentResponse(BaseModel):
    """Response model for a ticket comment."""

    kind: str
    metadata: CommentMetadataResponse
    data: CommentDataResponse


def comment_to_response(comment: Any) -> CommentResponse:
    """Convert a Comment to CommentResponse."""
    return CommentResponse.model_validate(comment.to_dict())


# Deletion models


class CloseFailureResponse(BaseModel):
    """A ticket that could not be closed."""

    number: int
    error: str


class DeleteTicketsResponse(BaseModel):
    """Response model for deleting the tickets of a Shoot."""

    closed: list[int] = []
    already_closed: list[int] = []
    failed: list[CloseFailureResponse] = []


def delete_result_to_response(result: Any) -> DeleteTicketsResponse:
    """Convert a DeleteResult to DeleteTicketsResponse."""
    response = DeleteTicketsResponse()
    for item in result.results:
        if item.error is not None:
            response.failed.append(CloseFailureResponse(number=item.number, error=str(item.error)))
        elif item.outcome is CloseOutcome.ALREADY_CLOSED:
            response.already_closed.append(item.number)
        else:
            response.closed.append(item.number)
    return response
