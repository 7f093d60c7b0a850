"""FastAPI dependencies for dependency injection."""

from __future__ import annotations

from collections.abc import Generator  # noqa: TC003
from typing import TYPE_CHECKING, Annotated

from fastapi import Depends

from ticketsync.tickets import TicketCache, TicketService

if TYPE_CHECKING:
    from ticketsync.api.events import EventManager

# Global TicketCache instance (initialized on app startup)
_ticket_cache: TicketCache | None = None


def init_ticket_cache() -> TicketCache:
    """Initialize the global TicketCache instance."""
    global _ticket_cache  # noqa: PLW0603
    _ticket_cache = TicketCache()
    return _ticket_cache


def close_ticket_cache() -> None:
    """Release the global TicketCache instance."""
    global _ticket_cache  # noqa: PLW0603
    _ticket_cache = None


def get_ticket_cache() -> Generator[TicketCache, None, None]:
    """Dependency that provides the TicketCache instance."""
    if _ticket_cache is None:
        raise RuntimeError("TicketCache not initialized. Call init_ticket_cache() first.")
    yield _ticket_cache


# Type alias for dependency injection
TicketCacheDep = Annotated[TicketCache, Depends(get_ticket_cache)]

# Global TicketService instance (initialized on app startup)
_ticket_service: TicketService | None = None


def init_ticket_service(service: TicketService) -> None:
    """Initialize the global TicketService instance."""
    global _ticket_service  # noqa: PLW0603
    _ticket_service = service


def close_ticket_service() -> None:
    """Release the global TicketService instance."""
    global _ticket_service  # noqa: PLW0603
    _ticket_service = None


def get_ticket_service() -> Generator[TicketService, None, None]:
    """Dependency that provides the TicketService instance."""
    if _ticket_service is None:
        raise RuntimeError("TicketService not initialized. Call init_ticket_service() first.")
    yield _ticket_service


# Type alias for dependency injection
TicketServiceDep = Annotated[TicketService, Depends(get_ticket_service)]

# Global EventManager instance
_event_manager: EventManager | None = None


def init_event_manager() -> EventManager:
    """Initialize the global EventManager instance."""
    from ticketsync.api.events import EventManager as EM  # noqa: PLC0415

    global _event_manager  # noqa: PLW0603
    _event_manager = EM()
    return _event_manager


def close_event_manager() -> None:
    """Release the global EventManager instance."""
    global _event_manager  # noqa: PLW0603
    _event_manager = None


def get_event_manager() -> Generator[EventManager, None, None]:
    """Dependency that provides the EventManager instance."""
    if _event_manager is None:
        raise RuntimeError("EventManager not initialized. Call init_event_manager() first.")
    yield _event_manager
