"""
Tests for live event encoding and Redis publishing.
"""

import json
from datetime import datetime, timezone

import pytest


class TestEventCodec:
    """Tests for encode_event / decode_event."""

    def test_encode_serializes_datetimes(self):
        from app.services.events import encode_event

        raw = encode_event(
            "board",
            {"text": "Oi", "created_at": datetime(2026, 3, 10, 12, 0, tzinfo=timezone.utc)},
        )

        assert json.loads(raw) == {
            "topic": "board",
            "data": {"text": "Oi", "created_at": "2026-03-10T12:00:00+00:00"},
            "user_id": None,
        }

    def test_decode_returns_event(self):
        from app.services.events import decode_event, encode_event

        event = decode_event(encode_event("orders", {"action": "cleared"}, user_id="u1"))

        assert event["topic"] == "orders"
        assert event["user_id"] == "u1"

    @pytest.mark.parametrize("raw", ["not json", "[1, 2]", '{"topic": "markets", "data": {}}', None])
    def test_decode_rejects_foreign_messages(self, raw):
        from app.services.events import decode_event

        assert decode_event(raw) is None


class TestPublishEvent:
    """Tests for publish_event against fakeredis."""

    @pytest.mark.asyncio
    async def test_publish_without_listeners_reaches_nobody(self):
        from app.services.events import publish_event

        assert await publish_event("board", {"text": "Oi"}) == 0

    @pytest.mark.asyncio
    async def test_published_event_is_received_on_topic_channel(self, mock_async_redis):
        from app.services.events import CHANNELS, decode_event, publish_event

        pubsub = mock_async_redis.pubsub()
        await pubsub.subscribe(CHANNELS["exchange_rate"])
        await pubsub.get_message(timeout=1)  # subscribe confirmation

        receivers = await publish_event("exchange_rate", {"current_rate": 0.036})
        message = await pubsub.get_message(ignore_subscribe_messages=True, timeout=1)

        assert receivers == 1
        event = decode_event(message["data"])
        assert event["data"] == {"current_rate": 0.036}

        await pubsub.unsubscribe()
        await pubsub.aclose()

    @pytest.mark.asyncio
    async def test_redis_failure_is_reported_as_zero(self, monkeypatch):
        from unittest.mock import AsyncMock

        from redis.exceptions import ConnectionError

        from app.services import events

        broken = AsyncMock()
        broken.publish.side_effect = ConnectionError("redis down")
        monkeypatch.setattr(events, "get_redis_client", AsyncMock(return_value=broken))

        assert await events.publish_event("board", {"text": "Oi"}) == 0
