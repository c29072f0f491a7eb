"""
Database definitions and collection constants.
"""
from app.database.databases import auth_db, sales_db, board_db, pricing_db, system_db

__all__ = ["auth_db", "sales_db", "board_db", "pricing_db", "system_db"]
