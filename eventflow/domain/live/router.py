"""Live router - streams change events to browsers over WebSocket"""

import asyncio
import logging

from fastapi import APIRouter, HTTPException, Query, WebSocket, WebSocketDisconnect

from ...auth import authenticate_token
from ...config import LIVE_QUEUE_SIZE
from ...database import SessionLocal
from ...models import Booking
from ...realtime import ChangeEvent, change_feed, manager
from .visibility import LIVE_COLLECTIONS, can_see

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/live", tags=["Live"])

CLOSE_UNAUTHORIZED = 4401
CLOSE_UNKNOWN_COLLECTION = 4404
CLOSE_TOO_SLOW = 4408


class LiveBuffer:
    """Bounded queue of pending events for one socket; flags a reader that falls behind"""

    def __init__(self, maxsize: int):
        self.queue: asyncio.Queue[ChangeEvent] = asyncio.Queue(maxsize=maxsize)
        self.overflowed = asyncio.Event()

    def push(self, event: ChangeEvent) -> None:
        try:
            self.queue.put_nowait(event)
        except asyncio.QueueFull:
            self.overflowed.set()


async def _wait_for_disconnect(websocket: WebSocket) -> None:
    while True:
        message = await websocket.receive()
        if message["type"] == "websocket.disconnect":
            return


@router.websocket("/{collection}")
async def live_collection(
    websocket: WebSocket,
    collection: str,
    token: str = Query(...),
):
    """Send every visible change on ``collection`` until the client disconnects"""
    if collection not in LIVE_COLLECTIONS:
        await websocket.close(code=CLOSE_UNKNOWN_COLLECTION)
        return

    # Sockets are long-lived, so they never hold a pooled connection
    try:
        with SessionLocal() as session:
            user = await authenticate_token(token, session)
            user_info = {"id": user.id, "role": user.role, "email": user.email}
    except HTTPException as e:
        logger.warning(f"⚠️ Live connection refused for {collection}: {e.detail}")
        await websocket.close(code=CLOSE_UNAUTHORIZED)
        return

    loop = asyncio.get_running_loop()
    buffer = LiveBuffer(LIVE_QUEUE_SIZE)

    def owns_booking(booking_id: str) -> bool:
        with SessionLocal() as session:
            return (
                session.query(Booking.id)
                .filter(Booking.id == booking_id, Booking.client_id == user_info["id"])
                .first()
                is not None
            )

    subscription = change_feed.subscribe(
        collection,
        lambda event: loop.call_soon_threadsafe(buffer.push, event),
        predicate=lambda event: can_see(user_info, event, owns_booking),
    )
    # Subscribe before the handshake completes
    try:
        await manager.connect(websocket, collection, user_info)
        receiver = asyncio.create_task(_wait_for_disconnect(websocket))
        overflow = asyncio.create_task(buffer.overflowed.wait())
        try:
            while True:
                getter = asyncio.create_task(buffer.queue.get())
                done, _ = await asyncio.wait(
                    {getter, receiver, overflow}, return_when=asyncio.FIRST_COMPLETED
                )
                if receiver in done:
                    getter.cancel()
                    break
                if overflow in done:
                    getter.cancel()
                    logger.warning(f"⚠️ {user_info['email']} fell behind on {collection}, closing")
                    await websocket.close(code=CLOSE_TOO_SLOW)
                    break
                await websocket.send_json(getter.result().model_dump(mode="json"))
        finally:
            receiver.cancel()
            overflow.cancel()
    except WebSocketDisconnect:
        pass
    finally:
        subscription.unsubscribe()
        manager.disconnect(websocket, collection)
        logger.info(f"🔌 {user_info['email']} stopped listening on {collection}")
