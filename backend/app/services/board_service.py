"""
Message board service.
"""
import logging
from datetime import datetime, timezone

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import DESCENDING

from app.database.databases import board_db
from app.models.common import as_utc, stringify_id
from app.models.user import User
from app.schemas.board import BoardMessageCreate, BoardMessageResponse
from app.services.events import Topics, publish_event

logger = logging.getLogger(__name__)

# Number of messages shown on the board
BOARD_WINDOW = 100


class BoardService:
    """Service for posting and reading board messages."""

    def __init__(self, db: AsyncIOMotorDatabase):
        """Initialize with board database."""
        self.db = db
        self.messages = db[board_db.Collections.MESSAGES]

    async def post_message(self, user: User, request: BoardMessageCreate) -> BoardMessageResponse:
        """Store a message and push it to live subscribers."""
        message_doc = {
            "text": request.text.strip(),
            "user_id": user.id,
            "user_email": user.email,
            "created_at": datetime.now(timezone.utc),
        }
        result = await self.messages.insert_one(message_doc)
        message_doc["_id"] = result.inserted_id

        response = self._message_to_response(message_doc)
        await publish_event(Topics.BOARD, response.model_dump())
        return response

    async def recent_messages(self, limit: int = BOARD_WINDOW) -> list[BoardMessageResponse]:
        """
        Most recent ``limit`` messages, oldest first.

        The newest messages are selected, then put back in reading order.
        Callers bound ``limit`` to 1..BOARD_WINDOW.
        """
        cursor = self.messages.find().sort("created_at", DESCENDING).limit(limit)
        docs = await cursor.to_list(length=limit)
        docs.reverse()
        return [self._message_to_response(doc) for doc in docs]

    @staticmethod
    def _message_to_response(doc: dict) -> BoardMessageResponse:
        doc = stringify_id(doc)
        return BoardMessageResponse(
            id=doc["_id"],
            text=doc["text"],
            user_id=doc["user_id"],
            user_email=doc["user_email"],
            created_at=as_utc(doc.get("created_at")),
        )
