"""Streaming text generation against Gemini.

The controller only knows about ``FragmentSource``: something that turns a
question into an async iterator of text fragments. ``GeminiFragmentSource``
is the production implementation, built on LangChain's Google GenAI chat
model. Tests substitute a fake.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from typing import Any, Protocol, runtime_checkable

from langchain_core.messages import HumanMessage, SystemMessage
from langchain_google_genai import ChatGoogleGenerativeAI

from mrwant.config.constants import GEMINI_SERVICE_NAME, SYSTEM_INSTRUCTION
from mrwant.config.settings import Settings
from mrwant.exceptions import ApiAuthenticationError, MalformedResponseError

logger = logging.getLogger(__name__)


@runtime_checkable
class FragmentSource(Protocol):
    """Produces a lazy, finite, non-restartable sequence of text fragments."""

    def stream(self, question: str, system_instruction: str) -> AsyncIterator[str]: ...


def extract_text(content: Any) -> str:
    """Normalise a streamed chunk's content to plain text.

    Gemini chunks usually carry a string. Multi-part chunks carry a list of
    strings or ``{"type": "text", "text": ...}`` dicts; non-text parts are
    skipped.

    Raises:
        MalformedResponseError: If the content is neither a string nor a list
            of recognisable parts.
    """
    if isinstance(content, str):
        return content

    if isinstance(content, list):
        parts: list[str] = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict):
                if part.get("type", "text") == "text":
                    text = part.get("text", "")
                    if not isinstance(text, str):
                        raise MalformedResponseError(content_type=type(text).__name__)
                    parts.append(text)
            else:
                raise MalformedResponseError(content_type=type(part).__name__)
        return "".join(parts)

    raise MalformedResponseError(content_type=type(content).__name__)


class GeminiFragmentSource:
    """Streams answers from Gemini through ``ChatGoogleGenerativeAI``.

    The chat client is created on first use and reused for every later
    exchange. It never changes after creation.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self._client: ChatGoogleGenerativeAI | None = None

    def _get_client(self) -> ChatGoogleGenerativeAI:
        if self._client is None:
            if not self.settings.has_api_key:
                raise ApiAuthenticationError(
                    "GOOGLE_API_KEY not set. Please configure it in environment or .env",
                    service=GEMINI_SERVICE_NAME,
                )
            kwargs: dict[str, Any] = {
                "model": self.settings.gemini_model,
                "google_api_key": self.settings.google_api_key,
            }
            if self.settings.temperature is not None:
                kwargs["temperature"] = self.settings.temperature
            self._client = ChatGoogleGenerativeAI(**kwargs)
            logger.info("Created Gemini client (model=%s)", self.settings.gemini_model)
        return self._client

    async def stream(
        self, question: str, system_instruction: str = SYSTEM_INSTRUCTION
    ) -> AsyncIterator[str]:
        client = self._get_client()
        messages = [
            SystemMessage(content=system_instruction),
            HumanMessage(content=question),
        ]
        logger.debug("Opening stream: model=%s question_len=%d", self.settings.gemini_model, len(question))

        async for chunk in client.astream(messages):
            if not hasattr(chunk, "content"):
                raise MalformedResponseError(content_type=type(chunk).__name__)
            text = extract_text(chunk.content)
            if text:
                yield text
