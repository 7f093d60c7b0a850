"""Ticket endpoints."""

from fastapi import APIRouter

from ticketsync.api.dependencies import TicketCacheDep, TicketServiceDep
from ticketsync.api.models import (
    APIResponse,
    CommentResponse,
    DeleteTicketsResponse,
    TicketResponse,
    comment_to_response,
    delete_result_to_response,
    ticket_to_response,
)

router = APIRouter(tags=["tickets"])


@router.get("/tickets", response_model=APIResponse[list[TicketResponse]])
def list_tickets(cache: TicketCacheDep) -> APIResponse[list[TicketResponse]]:
    """List all cached tickets."""
    return APIResponse(data=[ticket_to_response(t) for t in cache.get_issues()])


@router.post("/tickets/sync", response_model=APIResponse[list[TicketResponse]])
async def sync_tickets(service: TicketServiceDep) -> APIResponse[list[TicketResponse]]:
    """Sync open tickets from GitHub into the cache."""
    tickets = await service.sync_open_issues()
    return APIResponse(data=[ticket_to_response(t) for t in tickets])


@router.get(
    "/tickets/{number}/comments",
    response_model=APIResponse[list[CommentResponse]],
)
async def list_comments(
    number: int, service: TicketServiceDep
) -> APIResponse[list[CommentResponse]]:
    """Sync and list the comments of a ticket."""
    comments = await service.sync_comments(number)
    return APIResponse(data=[comment_to_response(c) for c in comments])


@router.get(
    "/namespaces/{namespace}/tickets",
    response_model=APIResponse[list[TicketResponse]],
)
def list_namespace_tickets(
    namespace: str, cache: TicketCacheDep
) -> APIResponse[list[TicketResponse]]:
    """List the cached tickets of a namespace."""
    tickets = cache.get_issues_for_namespace(namespace)
    return APIResponse(data=[ticket_to_response(t) for t in tickets])


@router.get(
    "/namespaces/{namespace}/shoots/{name}/tickets",
    response_model=APIResponse[list[TicketResponse]],
)
def list_shoot_tickets(
    namespace: str, name: str, cache: TicketCacheDep
) -> APIResponse[list[TicketResponse]]:
    """List the cached tickets of a Shoot."""
    numbers = cache.get_issue_numbers_for_name_and_namespace(name=name, namespace=namespace)
    tickets = [cache.get_issue(number) for number in numbers]
    return APIResponse(data=[ticket_to_response(t) for t in tickets if t is not None])


@router.delete(
    "/namespaces/{namespace}/shoots/{name}/tickets",
    response_model=APIResponse[DeleteTicketsResponse],
)
async def delete_shoot_tickets(
    namespace: str, name: str, service: TicketServiceDep
) -> APIResponse[DeleteTicketsResponse]:
    """Close all tickets of a deleted Shoot."""
    result = await service.delete_tickets_for_resource(name=name, namespace=namespace)
    return APIResponse(data=delete_result_to_response(result))
