"""
Live subscriptions.

ChangeFeed is an in-process publish/subscribe channel keyed by collection
name. Services publish a ChangeEvent after a successful commit; subscribers
register a handler (optionally with a predicate) and receive every matching
event until they unsubscribe. ConnectionManager tracks the WebSocket clients
that bridge the feed to browsers.
"""

import logging
from threading import Lock
from typing import Any, Callable, Optional

from fastapi import WebSocket
from pydantic import BaseModel

logger = logging.getLogger(__name__)


class ChangeEvent(BaseModel):
    collection: str
    kind: str  # created, updated
    document_id: str
    document: dict[str, Any]


Handler = Callable[[ChangeEvent], None]
Predicate = Callable[[ChangeEvent], bool]


class Subscription:
    def __init__(self, feed: "ChangeFeed", collection: str, handler: Handler, predicate: Optional[Predicate]):
        self.feed = feed
        self.collection = collection
        self.handler = handler
        self.predicate = predicate
        self.active = True

    def matches(self, event: ChangeEvent) -> bool:
        return self.predicate is None or self.predicate(event)

    def unsubscribe(self) -> None:
        if self.active:
            self.feed._remove(self)
            self.active = False


class ChangeFeed:
    """Publish/subscribe channel per collection"""

    def __init__(self):
        self._subscriptions: dict[str, list[Subscription]] = {}
        self._lock = Lock()

    def subscribe(
        self, collection: str, handler: Handler, predicate: Optional[Predicate] = None
    ) -> Subscription:
        subscription = Subscription(self, collection, handler, predicate)
        with self._lock:
            self._subscriptions.setdefault(collection, []).append(subscription)
        logger.debug(f"📡 Subscribed to {collection}")
        return subscription

    def _remove(self, subscription: Subscription) -> None:
        with self._lock:
            subscribers = self._subscriptions.get(subscription.collection, [])
            if subscription in subscribers:
                subscribers.remove(subscription)

    def subscriber_count(self, collection: str) -> int:
        with self._lock:
            return len(self._subscriptions.get(collection, []))

    def publish(self, event: ChangeEvent) -> int:
        """Deliver ``event`` to every matching subscriber, in registration order.

        A failing handler is logged and skipped. Returns the number of
        successful deliveries.
        """
        with self._lock:
            subscribers = list(self._subscriptions.get(event.collection, []))

        delivered = 0
        for subscription in subscribers:
            try:
                if not subscription.matches(event):
                    continue
                subscription.handler(event)
                delivered += 1
            except Exception as e:
                logger.error(f"❌ Change handler failed for {event.collection}/{event.document_id}: {e}")
        return delivered


# Global feed instance
change_feed = ChangeFeed()


def publish_change(collection: str, kind: str, document: dict[str, Any], feed: Optional[ChangeFeed] = None) -> int:
    """Publish a committed write. ``document`` is the serialized record and must carry 'id'."""
    event = ChangeEvent(
        collection=collection,
        kind=kind,
        document_id=str(document.get("id") or document.get("vendorId") or document.get("userId")),
        document=document,
    )
    return (feed or change_feed).publish(event)


class ConnectionManager:
    """Tracks live WebSocket clients and the user behind each"""

    def __init__(self):
        self.active_connections: dict[str, list[WebSocket]] = {}
        self.connection_users: dict[WebSocket, dict] = {}

    async def connect(self, websocket: WebSocket, collection: str, user_info: dict):
        await websocket.accept()
        self.active_connections.setdefault(collection, []).append(websocket)
        self.connection_users[websocket] = user_info
        logger.info(f"🔌 {user_info.get('email')} listening on {collection}")

    def disconnect(self, websocket: WebSocket, collection: str):
        connections = self.active_connections.get(collection, [])
        if websocket in connections:
            connections.remove(websocket)
        self.connection_users.pop(websocket, None)

    def connection_count(self) -> int:
        return sum(len(connections) for connections in self.active_connections.values())


manager = ConnectionManager()
