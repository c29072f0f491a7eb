"""
Assistant router for the Barudex chat.
"""
from fastapi import APIRouter, Depends

from app.dependencies.auth import CurrentUser
from app.schemas.assistant import ChatReply, ChatRequest, CuriosityRequest
from app.services.assistant_service import AssistantService

router = APIRouter(prefix="/assistant", tags=["Assistant"])


def get_assistant_service() -> AssistantService:
    """Dependency to get AssistantService instance."""
    return AssistantService()


@router.get(
    "/greeting",
    response_model=ChatReply,
    summary="Opening message",
)
async def greeting(
    current_user: CurrentUser,
    assistant: AssistantService = Depends(get_assistant_service),
):
    """The message the chat opens with."""
    return assistant.greeting()


@router.post(
    "/chat",
    response_model=ChatReply,
    summary="Send a message",
)
async def chat(
    body: ChatRequest,
    current_user: CurrentUser,
    assistant: AssistantService = Depends(get_assistant_service),
):
    """
    Send a message with the conversation so far.

    Returns 503 when the model is unavailable; the client shows that as an
    error bubble, which is left out of the history on the next request.
    """
    return await assistant.chat(body.message, body.history)


@router.post(
    "/curiosity",
    response_model=ChatReply,
    summary="Ask for an embroidery fun fact",
)
async def curiosity(
    body: CuriosityRequest,
    current_user: CurrentUser,
    assistant: AssistantService = Depends(get_assistant_service),
):
    """Shortcut for the "fun fact about embroidery" prompt."""
    return await assistant.curiosity(body.history)
