"""
Assistant chat schemas.
"""
from enum import Enum

from pydantic import BaseModel, Field


class MessageSender(str, Enum):
    """Who produced a chat bubble."""
    USER = "user"
    AI = "ai"
    ERROR = "error"


class ChatMessage(BaseModel):
    """One bubble of the assistant conversation."""
    sender: MessageSender
    text: str


class ChatRequest(BaseModel):
    """Body of ``POST /assistant/chat``."""
    message: str = Field(..., min_length=1, max_length=4000)
    history: list[ChatMessage] = Field(
        default_factory=list,
        description="Conversation so far, as displayed to the user",
    )


class CuriosityRequest(BaseModel):
    """Body of ``POST /assistant/curiosity``."""
    history: list[ChatMessage] = Field(default_factory=list)


class ChatReply(BaseModel):
    """Assistant answer."""
    sender: MessageSender = MessageSender.AI
    text: str
