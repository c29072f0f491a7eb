"""
Order service: sequential order numbers and order storage.
"""
import logging
from datetime import datetime, timezone
from typing import Optional

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorClientSession, AsyncIOMotorDatabase
from pymongo import DESCENDING
from pymongo.errors import DuplicateKeyError, PyMongoError

from app.core.exceptions import OrderNumberError
from app.database.connections import run_in_transaction
from app.database.databases import sales_db
from app.models.common import as_utc, stringify_id
from app.models.order import PLACEHOLDER_ORDER_NUMBERS, STARTING_ORDER_NUMBER
from app.models.user import User
from app.schemas.order import DeleteAllOrdersResponse, OrderCreate, OrderResponse
from app.services.events import Topics, publish_event

logger = logging.getLogger(__name__)

# Attempts before giving up when other writers keep advancing the counter
MAX_COUNTER_RETRIES = 10


def compute_next_order_number(last_order_number: Optional[int]) -> int:
    """
    Number following ``last_order_number``, never below the starting number.

    A missing or zero counter starts the sequence over.
    """
    if not last_order_number:
        return STARTING_ORDER_NUMBER
    return max(STARTING_ORDER_NUMBER, int(last_order_number) + 1)


class OrderService:
    """Service for order numbering and order CRUD."""

    def __init__(self, db: AsyncIOMotorDatabase):
        """Initialize with sales database."""
        self.db = db
        self.orders = db[sales_db.Collections.ORDERS]
        self.counters = db[sales_db.Collections.COUNTERS]

    # ==================== Order Numbers ====================

    async def next_order_number(self) -> str:
        """
        Allocate the next sequential order number.

        The counter document is advanced with a compare-and-set on its
        previous value, so two concurrent callers never get the same number.
        A caller that loses the race reads the counter again and retries.

        Raises:
            OrderNumberError: If the counter could not be advanced
        """
        try:
            for _ in range(MAX_COUNTER_RETRIES):
                counter = await self.counters.find_one({"_id": sales_db.ORDER_COUNTER_ID})

                if counter is None:
                    next_number = STARTING_ORDER_NUMBER
                    try:
                        await self.counters.insert_one({
                            "_id": sales_db.ORDER_COUNTER_ID,
                            "last_order_number": next_number,
                        })
                    except DuplicateKeyError:
                        continue
                    return str(next_number)

                last = counter.get("last_order_number")
                next_number = compute_next_order_number(last)
                result = await self.counters.update_one(
                    {"_id": sales_db.ORDER_COUNTER_ID, "last_order_number": last},
                    {"$set": {"last_order_number": next_number}},
                )
                if result.matched_count == 1:
                    return str(next_number)

                logger.debug("Order counter moved from %s, retrying", last)
        except PyMongoError as e:
            logger.error("Order counter update failed: %s", e)
            raise OrderNumberError() from e

        logger.error("Order counter still contended after %d attempts", MAX_COUNTER_RETRIES)
        raise OrderNumberError()

    async def reset_counter(self, session: Optional[AsyncIOMotorClientSession] = None) -> str:
        """Reset the counter so the next allocated number is the starting one."""
        await self.counters.update_one(
            {"_id": sales_db.ORDER_COUNTER_ID},
            {"$set": {"last_order_number": STARTING_ORDER_NUMBER - 1}},
            upsert=True,
            session=session,
        )
        logger.info("Order counter reset, next number is %d", STARTING_ORDER_NUMBER)
        return str(STARTING_ORDER_NUMBER)

    # ==================== Order CRUD ====================

    async def create_order(self, user: User, request: OrderCreate) -> OrderResponse:
        """
        Save an order for ``user``.

        A blank order number is replaced by a freshly allocated one.

        Raises:
            ValueError: If the order number is a form placeholder
            OrderNumberError: If a number had to be allocated and could not be
        """
        order_doc = request.model_dump()
        order_number = order_doc["order_number"].strip()

        if order_number in PLACEHOLDER_ORDER_NUMBERS:
            raise ValueError("Order number is not available yet")
        if not order_number:
            order_number = await self.next_order_number()

        order_doc.update({
            "order_number": order_number,
            "user_id": user.id,
            "user_email": user.email,
            "created_at": datetime.now(timezone.utc),
        })

        result = await self.orders.insert_one(order_doc)
        order_doc["_id"] = result.inserted_id
        response = self._order_to_response(order_doc)

        logger.info("Order %s saved by %s", order_number, user.email)
        await publish_event(
            Topics.ORDERS,
            {"action": "created", "order": response.model_dump()},
            user_id=user.id,
        )
        return response

    async def list_orders(self, user_id: str, limit: int = 100) -> list[OrderResponse]:
        """List a user's orders, newest first."""
        cursor = self.orders.find({"user_id": user_id}).sort("created_at", DESCENDING)
        docs = await cursor.to_list(length=limit)
        return [self._order_to_response(doc) for doc in docs]

    async def get_order(self, order_id: str, user_id: str) -> Optional[OrderResponse]:
        """Get one of the user's orders."""
        try:
            doc = await self.orders.find_one({"_id": ObjectId(order_id), "user_id": user_id})
        except InvalidId:
            return None

        if not doc:
            return None
        return self._order_to_response(doc)

    async def delete_order(self, order_id: str, user_id: str) -> bool:
        """Delete one of the user's orders. Returns False if nothing matched."""
        try:
            result = await self.orders.delete_one({"_id": ObjectId(order_id), "user_id": user_id})
        except InvalidId:
            return False

        if result.deleted_count == 0:
            return False

        await publish_event(
            Topics.ORDERS,
            {"action": "deleted", "order_id": order_id},
            user_id=user_id,
        )
        return True

    async def delete_all_and_reset_counter(self, user_id: str) -> DeleteAllOrdersResponse:
        """
        Delete all of the user's orders and restart the numbering.

        The deletion and the counter reset commit together or not at all.

        Raises:
            PyMongoError: If the transaction failed
        """
        async def clear(session: AsyncIOMotorClientSession) -> tuple[int, str]:
            result = await self.orders.delete_many({"user_id": user_id}, session=session)
            return result.deleted_count, await self.reset_counter(session)

        try:
            deleted, next_number = await run_in_transaction(clear)
        except PyMongoError as e:
            logger.error("Deleting orders of user %s failed: %s", user_id, e)
            raise

        logger.info("Deleted %d orders for user %s", deleted, user_id)
        await publish_event(
            Topics.ORDERS,
            {"action": "cleared", "deleted": deleted},
            user_id=user_id,
        )
        return DeleteAllOrdersResponse(
            deleted=deleted,
            next_order_number=next_number,
        )

    @staticmethod
    def _order_to_response(doc: dict) -> OrderResponse:
        doc = stringify_id(doc)
        doc["id"] = doc.pop("_id")
        doc["created_at"] = as_utc(doc.get("created_at"))
        return OrderResponse(**doc)
