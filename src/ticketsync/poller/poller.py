"""TicketPoller - Runs the open-ticket sync on a fixed interval."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ticketsync.tickets import Ticket, TicketService

logger = logging.getLogger(__name__)


class TicketPoller:
    """Background task calling TicketService.sync_open_issues periodically.

    A failed sync is logged and retried on the next tick; the poller
    itself only stops when stop() is called.
    """

    def __init__(self, service: TicketService, interval: float) -> None:
        """Initialize the TicketPoller.

        Args:
            service: TicketService to sync with.
            interval: Seconds between two syncs.
        """
        self.service = service
        self.interval = interval
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def poll_once(self) -> list[Ticket]:
        """Run a single sync cycle."""
        tickets = await self.service.sync_open_issues()
        logger.info("Polled %d open ticket(s)", len(tickets))
        return tickets

    async def _run(self) -> None:
        while True:
            try:
                await self.poll_once()
            except Exception:
                logger.exception("Ticket sync failed")
            await asyncio.sleep(self.interval)

    def start(self) -> None:
        """Start polling in the running event loop."""
        if self.running:
            return
        logger.info("Starting ticket poller (interval=%ss)", self.interval)
        self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        """Stop polling and wait for the task to finish."""
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        logger.info("Ticket poller stopped")
