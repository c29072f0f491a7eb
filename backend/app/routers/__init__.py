"""
API Routers module.
"""
from app.routers import assistant, auth, board, catalog, exchange_rate, health, orders, ws

__all__ = ["assistant", "auth", "board", "catalog", "exchange_rate", "health", "orders", "ws"]
