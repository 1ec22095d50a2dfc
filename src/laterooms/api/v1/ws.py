"""WebSocket endpoint for live auction countdowns."""

import logging
from uuid import UUID, uuid4

from fastapi import APIRouter, Query, WebSocket, WebSocketDisconnect

from laterooms.api.deps import Backend, Ticker
from laterooms.schemas.ws import CountdownEvent, ListingMissingEvent
from laterooms.services.countdown import Countdown
from laterooms.services.listing_service import ListingService

logger = logging.getLogger(__name__)

router = APIRouter()

LISTING_NOT_FOUND_CODE = 4004


@router.websocket("/ws/rooms/{listing_id}")
async def room_countdown(
    websocket: WebSocket,
    listing_id: str,
    backend: Backend,
    ticker: Ticker,
    detail: bool = Query(False, description="Use the detail page format"),
):
    """Push a countdown tick every interval while the listing is displayed.

    Connection URL: ws://host/ws/rooms/{listing_id}?detail=true

    Events pushed to client:
    - countdown: time left and urgency tier, stops after the ended tick

    Client can send:
    - ping: Server responds with pong (heartbeat)
    - refresh: Refetch the listing; the countdown restarts only if the
      end time changed
    """
    try:
        listing_uuid = UUID(listing_id)
    except ValueError:
        await websocket.close(code=4002, reason="Invalid listing ID")
        return

    await websocket.accept()

    listing_service = ListingService(backend)
    room = await listing_service.get_room(listing_uuid)
    if room is None:
        await websocket.send_json(ListingMissingEvent().model_dump(mode="json"))
        await websocket.close(code=LISTING_NOT_FOUND_CODE, reason="Room not found")
        return

    key = f"{listing_id}:{uuid4()}"

    async def send(countdown: Countdown) -> None:
        await websocket.send_json(CountdownEvent(data=countdown).model_dump(mode="json"))

    await ticker.watch(key, room["auction_ends_at"], send, listing_id=listing_uuid, detail=detail)
    logger.info(f"Countdown WebSocket connected: listing={listing_id}, detail={detail}")

    try:
        while True:
            data = await websocket.receive_text()

            if data == "ping":
                await websocket.send_text("pong")
            elif data == "refresh":
                room = await listing_service.get_room(listing_uuid)
                if room is None:
                    await ticker.unwatch(key)
                    await websocket.send_json(ListingMissingEvent().model_dump(mode="json"))
                    continue
                await ticker.watch(
                    key, room["auction_ends_at"], send, listing_id=listing_uuid, detail=detail
                )

    except WebSocketDisconnect:
        logger.info(f"Countdown WebSocket disconnected: listing={listing_id}")
    except Exception as e:
        logger.error(f"Countdown WebSocket error: listing={listing_id}, error={e}")
    finally:
        await ticker.unwatch(key)
