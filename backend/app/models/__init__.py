"""
Pydantic models for database documents and data structures.
"""
from app.models.user import User, UserRole, UserStatus
from app.models.order import (
    OrderFields,
    STARTING_ORDER_NUMBER,
    PLACEHOLDER_ORDER_NUMBERS,
)

__all__ = [
    "User",
    "UserRole",
    "UserStatus",
    "OrderFields",
    "STARTING_ORDER_NUMBER",
    "PLACEHOLDER_ORDER_NUMBERS",
]
