"""
Database module - MongoDB and Redis connections and database definitions.
"""
from app.database.connections import (
    get_mongo_client,
    get_redis_client,
    close_connections,
    get_database,
)
from app.database.databases import auth_db, sales_db, board_db, pricing_db, system_db

__all__ = [
    "get_mongo_client",
    "get_redis_client",
    "close_connections",
    "get_database",
    "auth_db",
    "sales_db",
    "board_db",
    "pricing_db",
    "system_db",
]
