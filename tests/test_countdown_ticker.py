"""Tests for the per-listing countdown ticker.

Tests verify:
- A tick is pushed immediately and the task stops after the ended tick
- unwatch cancels the task
- Re-watching with the same end time keeps the task, a new end time restarts it
- A failing send callback stops the task
"""

import asyncio
from datetime import timedelta
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from laterooms.services.countdown import Urgency
from laterooms.services.countdown_ticker import CountdownTicker


@pytest.fixture
def ticker(now) -> CountdownTicker:
    return CountdownTicker(interval=0.01, clock=lambda: now)


class TestCountdownTicker:
    """Test task lifecycle."""

    @pytest.mark.asyncio
    async def test_ended_listing_ticks_once_and_stops(self, ticker, now):
        send = AsyncMock()

        started = await ticker.watch("room", now - timedelta(minutes=1), send)
        task = ticker._watches["room"][0]
        await task

        assert started is True
        send.assert_awaited_once()
        countdown = send.await_args.args[0]
        assert countdown.ended is True
        assert countdown.urgency == Urgency.ENDED
        assert ticker.is_watching("room") is False

    @pytest.mark.asyncio
    async def test_live_listing_keeps_ticking(self, ticker, now):
        send = AsyncMock()
        listing_id = uuid4()

        await ticker.watch("room", now + timedelta(minutes=20), send, listing_id=listing_id)
        await asyncio.sleep(0.05)

        assert send.await_count >= 2
        countdown = send.await_args.args[0]
        assert countdown.listing_id == listing_id
        assert countdown.time_left == "20m 0s"
        assert ticker.is_watching("room") is True

        await ticker.unwatch("room")

    @pytest.mark.asyncio
    async def test_unwatch_cancels_task(self, ticker, now):
        await ticker.watch("room", now + timedelta(hours=1), AsyncMock())
        task = ticker._watches["room"][0]

        await ticker.unwatch("room")

        assert task.cancelled()
        assert ticker.is_watching("room") is False
        assert ticker.active_keys() == []

    @pytest.mark.asyncio
    async def test_unwatch_unknown_key_is_noop(self, ticker):
        await ticker.unwatch("missing")

    @pytest.mark.asyncio
    async def test_same_end_time_keeps_task(self, ticker, now):
        ends_at = now + timedelta(hours=1)
        await ticker.watch("room", ends_at, AsyncMock())
        task = ticker._watches["room"][0]

        restarted = await ticker.watch("room", ends_at, AsyncMock())

        assert restarted is False
        assert ticker._watches["room"][0] is task
        await ticker.unwatch("room")

    @pytest.mark.asyncio
    async def test_new_end_time_restarts_task(self, ticker, now):
        await ticker.watch("room", now + timedelta(hours=1), AsyncMock())
        old_task = ticker._watches["room"][0]

        restarted = await ticker.watch("room", now + timedelta(hours=2), AsyncMock())

        assert restarted is True
        assert old_task.cancelled()
        assert ticker._watches["room"][0] is not old_task
        await ticker.unwatch("room")

    @pytest.mark.asyncio
    async def test_failed_send_stops_task(self, ticker, now):
        send = AsyncMock(side_effect=RuntimeError("socket closed"))

        await ticker.watch("room", now + timedelta(hours=1), send)
        await asyncio.sleep(0.05)

        send.assert_awaited_once()
        assert ticker.is_watching("room") is False

    @pytest.mark.asyncio
    async def test_shutdown_cancels_everything(self, ticker, now):
        await ticker.watch("a", now + timedelta(hours=1), AsyncMock())
        await ticker.watch("b", now + timedelta(hours=2), AsyncMock())
        tasks = [ticker._watches[key][0] for key in ("a", "b")]

        await ticker.shutdown()

        assert all(task.cancelled() for task in tasks)
        assert ticker.active_keys() == []
