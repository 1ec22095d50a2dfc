"""Per-listing countdown ticker.

Each watched listing gets one asyncio task that recomputes the countdown every
interval and hands it to a send callback (usually a WebSocket).
"""

import asyncio
import logging
from contextlib import suppress
from datetime import datetime
from typing import Awaitable, Callable
from uuid import UUID

from laterooms.core.config import settings
from laterooms.services.countdown import Countdown, countdown_for, ensure_aware, utcnow

logger = logging.getLogger(__name__)

SendCountdown = Callable[[Countdown], Awaitable[None]]


class CountdownTicker:
    """Keeps one countdown task per key.

    Structure: {key: (task, ends_at)}
    """

    def __init__(
        self,
        interval: float | None = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.interval = settings.COUNTDOWN_INTERVAL_SECONDS if interval is None else interval
        self.clock = clock
        self._watches: dict[str, tuple[asyncio.Task, datetime]] = {}
        self._lock = asyncio.Lock()

    async def watch(
        self,
        key: str,
        ends_at: datetime,
        send: SendCountdown,
        listing_id: UUID | None = None,
        detail: bool = False,
    ) -> bool:
        """Start ticking ``key`` towards ``ends_at``.

        A running task with the same ``ends_at`` is kept; a different
        ``ends_at`` cancels it and starts a new one.

        Returns:
            True if a new task was started
        """
        ends_at = ensure_aware(ends_at)
        async with self._lock:
            current = self._watches.get(key)
            if current is not None:
                task, current_ends_at = current
                if current_ends_at == ends_at and not task.done():
                    return False
                await self._cancel(task)

            task = asyncio.create_task(self._run(key, ends_at, send, listing_id, detail))
            self._watches[key] = (task, ends_at)
            logger.debug(f"Countdown started: key={key}, ends_at={ends_at.isoformat()}")
            return True

    async def unwatch(self, key: str) -> None:
        """Stop ticking ``key`` and wait for its task to finish."""
        async with self._lock:
            current = self._watches.pop(key, None)
        if current is not None:
            await self._cancel(current[0])
            logger.debug(f"Countdown stopped: key={key}")

    async def shutdown(self) -> None:
        async with self._lock:
            watches = list(self._watches.values())
            self._watches.clear()
        for task, _ in watches:
            await self._cancel(task)
        if watches:
            logger.info(f"Countdown ticker shut down, cancelled {len(watches)} task(s)")

    def is_watching(self, key: str) -> bool:
        current = self._watches.get(key)
        return current is not None and not current[0].done()

    def active_keys(self) -> list[str]:
        return [key for key in self._watches if self.is_watching(key)]

    @staticmethod
    async def _cancel(task: asyncio.Task) -> None:
        if task is asyncio.current_task():
            return
        task.cancel()
        with suppress(asyncio.CancelledError):
            await task

    async def _run(
        self,
        key: str,
        ends_at: datetime,
        send: SendCountdown,
        listing_id: UUID | None,
        detail: bool,
    ) -> None:
        try:
            while True:
                countdown = countdown_for(ends_at, self.clock(), listing_id=listing_id, detail=detail)
                try:
                    await send(countdown)
                except Exception as e:
                    logger.warning(f"Countdown send failed for {key}: {e}")
                    break
                if countdown.ended:
                    break
                await asyncio.sleep(self.interval)
        finally:
            current = self._watches.get(key)
            if current is not None and current[0] is asyncio.current_task():
                del self._watches[key]
