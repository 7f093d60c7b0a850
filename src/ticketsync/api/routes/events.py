"""Server-Sent Events (SSE) endpoint."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Annotated

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse

from ticketsync.api.dependencies import get_event_manager
from ticketsync.api.events import EventManager

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

EventManagerDep = Annotated[EventManager, Depends(get_event_manager)]

router = APIRouter(prefix="/events", tags=["events"])


@router.get("/stream")
async def event_stream(
    event_manager: EventManagerDep,
    namespace: str | None = Query(default=None, description="Filter by namespace"),
) -> StreamingResponse:
    """Subscribe to ticket cache changes as Server-Sent Events.

    Events are filtered by namespace if provided, otherwise all events are sent.
    A heartbeat is sent every 30 seconds to keep the connection alive.
    """
    em: EventManager = event_manager
    subscriber = em.subscribe(namespace)

    async def generate() -> AsyncGenerator[str, None]:
        try:
            while True:
                try:
                    event = await asyncio.wait_for(
                        subscriber.queue.get(),
                        timeout=em._heartbeat_interval,
                    )
                    yield event.to_sse()
                except TimeoutError:
                    yield em.create_heartbeat_event().to_sse()
        finally:
            em.unsubscribe(subscriber.id)

    return StreamingResponse(
        generate(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",  # Disable nginx buffering
        },
    )
