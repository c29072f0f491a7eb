"""
Catalog response schemas.
"""
from enum import Enum
from typing import Optional

from pydantic import BaseModel


class PriceStatus(str, Enum):
    """Where a machine's displayed price comes from."""
    CALCULATED = "calculated"
    RATE_MISSING = "rate_missing"
    STATIC = "static"


class MachineQuote(BaseModel):
    """A catalog machine with its price for the current reference rate."""
    name: str
    type: str
    description: str
    jpy_price: Optional[int] = None
    price: str
    price_status: PriceStatus
    brl_price: Optional[float] = None


class ProductTypeResponse(BaseModel):
    """Machines of one product type."""
    product_type: str
    reference_rate: Optional[float] = None
    models: list[MachineQuote]


class SupplyItem(BaseModel):
    """An entry of the supplies grid."""
    name: str
    price: str
    image: str
