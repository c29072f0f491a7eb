"""
Message board request/response schemas.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

MAX_MESSAGE_LENGTH = 2000


class BoardMessageCreate(BaseModel):
    """Body of ``POST /board/messages``."""
    text: str = Field(..., max_length=MAX_MESSAGE_LENGTH, description="Message text")

    @field_validator("text")
    @classmethod
    def text_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Message text cannot be empty")
        return value


class BoardMessageResponse(BaseModel):
    """Board message as returned to clients."""
    id: str
    text: str
    user_id: str
    user_email: str
    created_at: Optional[datetime] = None
