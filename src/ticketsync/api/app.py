"""FastAPI application setup."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ticketsync import get_version
from ticketsync.api.dependencies import (
    close_event_manager,
    close_ticket_cache,
    close_ticket_service,
    init_event_manager,
    init_ticket_cache,
    init_ticket_service,
)
from ticketsync.api.models import APIResponse
from ticketsync.api.routes import events, tickets
from ticketsync.config import load_settings
from ticketsync.github import GitHubClient, GitHubError, IssueNotFoundError
from ticketsync.logging import sanitize_for_log
from ticketsync.poller import TicketPoller
from ticketsync.tickets import TicketNotFoundError, TicketService

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from ticketsync.config import Settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings: Settings | None = getattr(app.state, "settings", None)
    if settings is None:
        settings = load_settings()
        app.state.settings = settings

    # Startup
    cache = init_ticket_cache()
    event_manager = init_event_manager()
    cache.subscribe(event_manager.publish_cache_event)

    client = GitHubClient(repo=settings.repo, token=settings.token, base_url=settings.api_url)
    service = TicketService(source=client, cache=cache)
    init_ticket_service(service)

    poller: TicketPoller | None = None
    if settings.poll_interval > 0:
        poller = TicketPoller(service, interval=settings.poll_interval)
        poller.start()

    logger.info("ticketsync started for %s", settings.repo)
    yield
    # Shutdown
    if poller is not None:
        await poller.stop()
    await client.aclose()
    close_ticket_service()
    close_event_manager()
    close_ticket_cache()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Runtime settings. Loaded from file/environment on startup
            when not given.
    """
    app = FastAPI(
        title="ticketsync API",
        description="GitHub issue tickets for Shoot clusters",
        version=get_version(),
        lifespan=lifespan,
    )

    # Store config for lifespan manager
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(tickets.router, prefix="/api/v1")
    app.include_router(events.router, prefix="/api/v1")

    return app


def register_exception_handlers(app: FastAPI) -> None:
    """Translate ticket and GitHub errors into API responses."""

    @app.exception_handler(TicketNotFoundError)
    async def ticket_not_found_handler(
        _request: Request, _exc: TicketNotFoundError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content=APIResponse[None](data=None, error="Ticket not found").model_dump(),
        )

    @app.exception_handler(IssueNotFoundError)
    async def issue_not_found_handler(
        _request: Request, _exc: IssueNotFoundError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content=APIResponse[None](data=None, error="Issue not found on GitHub").model_dump(),
        )

    @app.exception_handler(GitHubError)
    async def github_error_handler(_request: Request, exc: GitHubError) -> JSONResponse:
        logger.error("GitHub request failed: %s", sanitize_for_log(str(exc)))
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content=APIResponse[None](data=None, error="GitHub request failed").model_dump(),
        )


# Default app instance
app = create_app()
