"""
Barudex assistant backed by Google Gemini.

Each request carries the conversation as the user sees it. It is converted
to Gemini chat history and a fresh chat session answers the new message,
so the backend keeps no chat state between requests.
"""
import logging
from typing import Optional

import google.generativeai as genai
from google.api_core.exceptions import GoogleAPIError

from app.config import get_settings
from app.core.exceptions import LLMUnavailableError
from app.schemas.assistant import ChatMessage, ChatReply, MessageSender

logger = logging.getLogger(__name__)

SYSTEM_INSTRUCTION = (
    "Você é um assistente criativo e prestativo. Seu objetivo é dar respostas "
    "curtas e interessantes em português, focando em curiosidades ou fatos "
    "rápidos sobre o tópico que o usuário perguntar. Mantenha as respostas "
    "concisas, fascinantes e amigáveis."
)

GREETING = (
    "Olá! Eu sou Barudex, o assistente virtual da Barudan do Brasil. "
    "Como posso te ajudar hoje?"
)

CURIOSITY_PROMPT = "Me fale um fato interessante sobre bordado."


def map_history(messages: list[ChatMessage]) -> list[dict]:
    """
    Convert displayed chat bubbles to Gemini chat history.

    Error bubbles are dropped, and the history must open with a user turn,
    so anything before the first user message (the greeting) is dropped too.
    """
    conversation = [
        msg for msg in messages
        if msg.sender in (MessageSender.USER, MessageSender.AI)
    ]

    first_user = next(
        (i for i, msg in enumerate(conversation) if msg.sender == MessageSender.USER),
        None,
    )
    if first_user is None:
        return []

    return [
        {
            "role": "user" if msg.sender == MessageSender.USER else "model",
            "parts": [msg.text],
        }
        for msg in conversation[first_user:]
    ]


class AssistantService:
    """Service for the Barudex chat."""

    def __init__(self, api_key: Optional[str] = None, model_name: Optional[str] = None):
        settings = get_settings()
        self.api_key = api_key or settings.gemini_api_key
        self.model_name = model_name or settings.gemini_model

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def greeting(self) -> ChatReply:
        return ChatReply(text=GREETING)

    async def chat(self, message: str, history: list[ChatMessage]) -> ChatReply:
        """
        Answer ``message`` in the context of ``history``.

        Raises:
            LLMUnavailableError: If no API key is set or Gemini fails
        """
        if not self.is_configured:
            logger.error("Gemini API key is not set")
            raise LLMUnavailableError()

        genai.configure(api_key=self.api_key)
        model = genai.GenerativeModel(
            model_name=self.model_name,
            system_instruction=SYSTEM_INSTRUCTION,
        )
        chat = model.start_chat(history=map_history(history))

        try:
            response = await chat.send_message_async(message)
            text = response.text
        except (GoogleAPIError, ValueError) as e:
            # ValueError is raised by ``response.text`` when the answer was blocked
            logger.error("Error sending message to Gemini: %s", e)
            raise LLMUnavailableError() from e

        return ChatReply(text=text)

    async def curiosity(self, history: list[ChatMessage]) -> ChatReply:
        """Ask for an embroidery fun fact."""
        return await self.chat(CURIOSITY_PROMPT, history)
