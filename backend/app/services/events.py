"""
Live event fan-out over Redis pub/sub.

Every write that other users should see right away (a board message, a new
reference rate, a saved or deleted order) is published on a Redis channel.
Each backend process runs one listener that forwards those events to its own
WebSocket clients, so all workers deliver the same events.

Event payload on the wire::

    {"topic": "board", "data": {...}, "user_id": null}

``user_id`` is set only for events that belong to a single user.
"""
import json
import logging
from typing import Any, AsyncIterator, Optional

from redis.asyncio import Redis
from redis.exceptions import RedisError

from app.database.connections import get_redis_client

logger = logging.getLogger(__name__)


class Topics:
    """Topics clients can subscribe to on ``/ws/live``."""
    BOARD = "board"
    EXCHANGE_RATE = "exchange_rate"
    ORDERS = "orders"


# Redis channel per topic
CHANNELS = {
    Topics.BOARD: "board:messages",
    Topics.EXCHANGE_RATE: "exchange_rate:updates",
    Topics.ORDERS: "orders:events",
}

TOPIC_BY_CHANNEL = {channel: topic for topic, channel in CHANNELS.items()}

# Topics whose events are only delivered to the owning user
PRIVATE_TOPICS = {Topics.ORDERS}


def encode_event(topic: str, data: dict[str, Any], user_id: Optional[str] = None) -> str:
    """Serialize an event for publishing. Datetimes become ISO strings."""
    return json.dumps(
        {"topic": topic, "data": data, "user_id": user_id},
        default=_json_default,
    )


def decode_event(raw: str) -> Optional[dict[str, Any]]:
    """Parse a published event, or None if it is not one of ours."""
    try:
        event = json.loads(raw)
    except (json.JSONDecodeError, TypeError):
        return None
    if not isinstance(event, dict) or event.get("topic") not in CHANNELS:
        return None
    return event


async def publish_event(
    topic: str,
    data: dict[str, Any],
    user_id: Optional[str] = None,
) -> int:
    """
    Publish an event to every backend process.

    The write that triggered the event is already persisted, so a Redis
    failure is logged and reported as zero receivers instead of failing the
    request.

    Returns:
        Number of subscribers that received the message
    """
    try:
        redis = await get_redis_client()
        return await redis.publish(CHANNELS[topic], encode_event(topic, data, user_id))
    except RedisError as e:
        logger.warning("Could not publish %s event: %s", topic, e)
        return 0


async def listen_events(redis: Redis) -> AsyncIterator[dict[str, Any]]:
    """Yield decoded events from all live channels until cancelled."""
    pubsub = redis.pubsub()
    await pubsub.subscribe(*CHANNELS.values())
    try:
        async for message in pubsub.listen():
            if message.get("type") != "message":
                continue
            event = decode_event(message.get("data"))
            if event is not None:
                yield event
    finally:
        await pubsub.unsubscribe()
        await pubsub.aclose()


def _json_default(value: Any) -> str:
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)
