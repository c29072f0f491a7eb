"""
Database registry management.
Registers every portal database on startup and creates its indexes.
"""
import logging
from datetime import datetime, timezone

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ASCENDING, DESCENDING

from app.database.databases import auth_db, sales_db, board_db, pricing_db, system_db

logger = logging.getLogger(__name__)

ALL_DB_MANIFESTS = [
    auth_db.DB_MANIFEST,
    sales_db.DB_MANIFEST,
    board_db.DB_MANIFEST,
    pricing_db.DB_MANIFEST,
    system_db.DB_MANIFEST,
]


async def sync_registry(client: AsyncIOMotorClient) -> None:
    """
    Upsert one registry entry per database manifest and make sure each
    database carries a ``_metadata`` document.
    """
    registry_collection = client[system_db.DB_NAME][system_db.Collections.DB_REGISTRY]
    now = datetime.now(timezone.utc)

    for manifest in ALL_DB_MANIFESTS:
        db_name = manifest["db_name"]

        await registry_collection.update_one(
            {"_id": db_name},
            {
                "$set": {
                    "purpose": manifest["purpose"],
                    "collections": manifest["collections"],
                    "access_level": manifest["access_level"],
                    "schema_version": system_db.SCHEMA_VERSION,
                    "updated_at": now,
                },
                "$setOnInsert": {"created_at": now},
            },
            upsert=True,
        )

        await client[db_name]["_metadata"].update_one(
            {"_id": "db_metadata"},
            {
                "$set": {"db_name": db_name, "last_updated_at": now},
                "$setOnInsert": {"created_at": now},
            },
            upsert=True,
        )

    logger.debug("Registry synced for %d databases", len(ALL_DB_MANIFESTS))


async def create_indexes(client: AsyncIOMotorClient) -> None:
    """Create the indexes every query path relies on."""
    users = client[auth_db.DB_NAME][auth_db.Collections.USERS]
    await users.create_index("email", unique=True)

    orders = client[sales_db.DB_NAME][sales_db.Collections.ORDERS]
    await orders.create_index([("user_id", ASCENDING), ("created_at", DESCENDING)])

    messages = client[board_db.DB_NAME][board_db.Collections.MESSAGES]
    await messages.create_index([("created_at", DESCENDING)])

    history = client[pricing_db.DB_NAME][pricing_db.Collections.EXCHANGE_RATE_HISTORY]
    await history.create_index([("updated_at", DESCENDING)])
