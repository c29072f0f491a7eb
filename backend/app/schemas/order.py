"""
Order request/response schemas.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from app.models.order import OrderFields


class OrderCreate(OrderFields):
    """
    Body of ``POST /orders``.

    A blank ``order_number`` asks the server to allocate the next one.
    """


class OrderResponse(OrderFields):
    """Saved order as returned to clients."""
    id: str = Field(..., description="Order ID")
    user_id: str = Field(..., description="Owner user ID")
    user_email: str = Field(..., description="Owner email")
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")


class OrderNumberResponse(BaseModel):
    """Freshly allocated order number."""
    order_number: str = Field(..., description="Sequential order number")


class DeleteAllOrdersResponse(BaseModel):
    """Outcome of the bulk delete and counter reset."""
    deleted: int = Field(..., description="Number of orders deleted")
    next_order_number: str = Field(..., description="Number the next order will get")
