"""
Exchange rate request/response schemas.
"""
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class ReferenceRateUpdate(BaseModel):
    """Body of ``PUT /exchange-rate/reference``."""
    rate: float = Field(..., gt=0, description="BRL per JPY used to price machines")


class ReferenceRateResponse(BaseModel):
    """Current reference rate."""
    current_rate: float
    last_updated_by: str
    last_updated_at: Optional[datetime] = None


class HistoryEntryResponse(BaseModel):
    """One reference rate change."""
    id: str
    rate: float
    updated_by: str
    updated_at: Optional[datetime] = None


class RateComparisonStatus(str, Enum):
    """How the live rate relates to the reference rate."""
    EQUAL = "equal"
    ABOVE = "above"
    BELOW = "below"


class RateComparison(BaseModel):
    """Live rate compared against the reference rate."""
    status: RateComparisonStatus
    percentage_diff: float = Field(..., description="(live - reference) / reference * 100")
    message: str


class LiveRateResponse(BaseModel):
    """Market JPY/BRL rate with optional comparison."""
    rate: float = Field(..., description="Current market BRL per JPY")
    fetched_at: datetime
    reference_rate: Optional[float] = None
    comparison: Optional[RateComparison] = None
