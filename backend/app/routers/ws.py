"""
WebSocket router for live board, exchange rate and order updates.
"""
import asyncio
import logging
import uuid
from typing import Optional

from fastapi import APIRouter, WebSocket, WebSocketDisconnect, Query, status
from redis.exceptions import RedisError

from app.database.connections import get_mongo_client, get_redis_client
from app.database.databases import auth_db
from app.models.user import User, UserStatus
from app.services.auth_service import AuthService
from app.services.events import CHANNELS, PRIVATE_TOPICS, listen_events

logger = logging.getLogger(__name__)

router = APIRouter(tags=["WebSocket"])

# Seconds to wait before listening again after Redis dropped the subscription
RELAY_RETRY_SECONDS = 5


class ConnectionManager:
    """
    Manages active WebSocket connections and their topic subscriptions.

    A user may have several connections open (one per browser tab), so
    connections are tracked by their own id.
    """

    def __init__(self):
        # connection_id -> WebSocket
        self.active_connections: dict[str, WebSocket] = {}
        # connection_id -> owning user_id
        self.owners: dict[str, str] = {}
        # connection_id -> subscribed topics
        self.subscriptions: dict[str, set[str]] = {}

    async def connect(self, websocket: WebSocket, user_id: str) -> str:
        """Accept connection and register it. Returns the connection id."""
        await websocket.accept()
        connection_id = uuid.uuid4().hex
        self.active_connections[connection_id] = websocket
        self.owners[connection_id] = user_id
        self.subscriptions[connection_id] = set()
        return connection_id

    def disconnect(self, connection_id: str) -> None:
        """Remove connection and its subscriptions."""
        self.active_connections.pop(connection_id, None)
        self.owners.pop(connection_id, None)
        self.subscriptions.pop(connection_id, None)

    def subscribe(self, connection_id: str, topics: list[str]) -> None:
        if connection_id in self.subscriptions:
            self.subscriptions[connection_id].update(topics)

    def unsubscribe(self, connection_id: str, topics: list[str]) -> None:
        if connection_id in self.subscriptions:
            self.subscriptions[connection_id].difference_update(topics)

    def get_subscribed_connections(self, topic: str, user_id: Optional[str] = None) -> list[str]:
        """Connections subscribed to ``topic``, limited to ``user_id``'s when given."""
        return [
            connection_id for connection_id, topics in self.subscriptions.items()
            if topic in topics and (user_id is None or self.owners.get(connection_id) == user_id)
        ]

    async def send(self, connection_id: str, message: dict) -> bool:
        """Send message to one connection."""
        websocket = self.active_connections.get(connection_id)
        if websocket is None:
            return False
        try:
            await websocket.send_json(message)
            return True
        except (WebSocketDisconnect, RuntimeError) as e:
            logger.debug("Dropping message for closed connection %s: %s", connection_id, e)
            return False

    async def dispatch(self, event: dict) -> int:
        """
        Deliver a published event to its subscribers.

        Events of private topics only reach connections of the owning user.

        Returns:
            Number of connections the event was sent to
        """
        topic = event["topic"]
        user_id = event.get("user_id")
        if topic in PRIVATE_TOPICS and not user_id:
            return 0

        message = {"type": "event", "topic": topic, "data": event.get("data")}
        owner = user_id if topic in PRIVATE_TOPICS else None
        delivered = 0
        for connection_id in self.get_subscribed_connections(topic, owner):
            if await self.send(connection_id, message):
                delivered += 1
        return delivered


# Global connection manager
manager = ConnectionManager()


async def relay_events() -> None:
    """
    Forward Redis pub/sub events to this process's WebSocket clients.

    Runs for the lifetime of the app and resubscribes after any failure.
    Only cancellation stops it.
    """
    while True:
        try:
            redis = await get_redis_client()
            async for event in listen_events(redis):
                try:
                    await manager.dispatch(event)
                except Exception:
                    logger.exception("Failed to deliver %s event", event.get("topic"))
        except (RedisError, OSError) as e:
            logger.warning("Live event relay interrupted: %s", e)
        except Exception:
            logger.exception("Live event relay failed")
        await asyncio.sleep(RELAY_RETRY_SECONDS)


async def validate_token(token: str) -> Optional[User]:
    """
    Validate JWT token and return the active user it belongs to.

    Returns:
        User if token is valid, None otherwise
    """
    client = await get_mongo_client()
    user = await AuthService(client[auth_db.DB_NAME]).get_user_from_token(token)

    if not user or user.status != UserStatus.ACTIVE.value:
        return None
    return user


def _parse_topics(data: dict) -> tuple[list[str], list[str]]:
    """Split requested topics into known and unknown ones."""
    requested = data.get("topics") or []
    if not isinstance(requested, list):
        requested = [requested]
    known = [t for t in requested if t in CHANNELS]
    unknown = [str(t) for t in requested if t not in CHANNELS]
    return known, unknown


@router.websocket("/ws/live")
async def websocket_live_data(
    websocket: WebSocket,
    token: str = Query(..., description="JWT access token"),
):
    """
    WebSocket endpoint for live updates.

    **Connection**: Connect with `?token=xxx` query parameter.

    **Messages from client**:
    ```json
    {"action": "subscribe", "topics": ["board", "exchange_rate", "orders"]}
    {"action": "unsubscribe", "topics": ["board"]}
    {"action": "ping"}
    ```

    **Messages from server**:
    ```json
    {"type": "connected", "user_id": "..."}
    {"type": "subscribed", "topics": [...]}
    {"type": "unsubscribed", "topics": [...]}
    {"type": "event", "topic": "board", "data": {...}}
    {"type": "pong"}
    {"type": "error", "message": "..."}
    ```
    """
    user = await validate_token(token)

    if user is None:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    connection_id = await manager.connect(websocket, user.id)

    await websocket.send_json({
        "type": "connected",
        "user_id": user.id,
        "message": "Connected to live updates",
    })

    try:
        while True:
            try:
                data = await websocket.receive_json()
            except ValueError:
                await websocket.send_json({"type": "error", "message": "Invalid JSON"})
                continue

            if not isinstance(data, dict):
                await websocket.send_json({"type": "error", "message": "Expected a JSON object"})
                continue

            action = data.get("action")

            if action in ("subscribe", "unsubscribe"):
                topics, unknown = _parse_topics(data)
                if unknown:
                    await websocket.send_json({
                        "type": "error",
                        "message": f"Unknown topics: {', '.join(unknown)}",
                    })
                if not topics:
                    continue
                if action == "subscribe":
                    manager.subscribe(connection_id, topics)
                    await websocket.send_json({"type": "subscribed", "topics": topics})
                else:
                    manager.unsubscribe(connection_id, topics)
                    await websocket.send_json({"type": "unsubscribed", "topics": topics})

            elif action == "ping":
                await websocket.send_json({"type": "pong"})

            else:
                await websocket.send_json({
                    "type": "error",
                    "message": f"Unknown action: {action}",
                })

    except WebSocketDisconnect:
        pass
    finally:
        manager.disconnect(connection_id)
