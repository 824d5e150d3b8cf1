"""Generative-language provider port and its Gemini adapter.

The gateway only talks to ``GenerativeClient``. ``GeminiClient`` implements it
with pydantic-ai for free-text turns (summaries, tutor chat) and with the
google-genai client owned by the same provider for schema-constrained JSON,
where the raw response text is needed for validation. Provider imports are
kept lazy to avoid import-time errors when credentials are missing.
"""

from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence

from pydantic_ai import Agent
from pydantic_ai.messages import (
    BinaryContent,
    ModelMessage,
    ModelRequest,
    ModelResponse,
    TextPart,
    UserPromptPart,
)

from studiq.core.config import settings
from studiq.core.logging import get_logger
from studiq.modules.chat.models import ChatMessage, ChatRole

logger = get_logger(__name__)


class GenerativeClient(Protocol):
    async def generate_text(
        self,
        prompt: str,
        *,
        system_instruction: Optional[str] = None,
        history: Sequence[ChatMessage] = (),
        image: Optional[bytes] = None,
        image_mime_type: str = "image/jpeg",
    ) -> str: ...

    async def generate_structured(self, prompt: str, schema: dict[str, Any]) -> str:
        """Return raw JSON text constrained by ``schema``."""
        ...


def to_model_messages(history: Sequence[ChatMessage]) -> list[ModelMessage]:
    """Map a chat transcript onto pydantic-ai message history."""
    messages: list[ModelMessage] = []
    for m in history:
        if m.role == ChatRole.USER:
            messages.append(ModelRequest(parts=[UserPromptPart(content=m.text)]))
        else:
            messages.append(ModelResponse(parts=[TextPart(content=m.text)]))
    return messages


def _build_google_provider(api_key: str):
    """Build the Google provider (lazy import)."""
    from pydantic_ai.providers.google import GoogleProvider

    return GoogleProvider(api_key=api_key)


def _build_google_model(model_name: str, provider):
    from pydantic_ai.models.google import GoogleModel

    return GoogleModel(model_name, provider=provider)


class GeminiClient:
    """Gemini-backed ``GenerativeClient``.

    ``model`` (any pydantic-ai model) and ``genai_client`` can be injected;
    whatever is missing is built from ``GEMINI_API_KEY``/``GEMINI_MODEL``.
    """

    def __init__(
        self,
        *,
        model: Any = None,
        genai_client: Any = None,
        model_name: Optional[str] = None,
        api_key: Optional[str] = None,
        temperature: Optional[float] = None,
    ) -> None:
        cfg = settings.gemini
        self.model_name = model_name or cfg.model
        self.temperature = cfg.temperature if temperature is None else temperature
        self._api_key = api_key or cfg.api_key
        self._model = model
        self._genai = genai_client
        self._google_provider = None

    def _provider(self):
        """Build the provider on first use so the app starts without a key."""
        if self._google_provider is None:
            if not self._api_key:
                raise RuntimeError(
                    "Gemini API key not configured. Set GEMINI_API_KEY in your environment."
                )
            self._google_provider = _build_google_provider(self._api_key)
        return self._google_provider

    def _text_model(self):
        if self._model is None:
            self._model = _build_google_model(self.model_name, self._provider())
        return self._model

    def _genai_client(self):
        if self._genai is None:
            self._genai = self._provider().client
        return self._genai

    def _model_settings(self) -> Optional[dict[str, Any]]:
        if self.temperature is None:
            return None
        return {"temperature": self.temperature}

    async def generate_text(
        self,
        prompt: str,
        *,
        system_instruction: Optional[str] = None,
        history: Sequence[ChatMessage] = (),
        image: Optional[bytes] = None,
        image_mime_type: str = "image/jpeg",
    ) -> str:
        # instructions (unlike system_prompt) are sent even with message history
        agent: Agent[None, str] = Agent(self._text_model(), instructions=system_instruction)
        user_prompt: Any = prompt
        if image is not None:
            user_prompt = [BinaryContent(data=image, media_type=image_mime_type), prompt]
        res = await agent.run(
            user_prompt,
            message_history=to_model_messages(history) or None,
            model_settings=self._model_settings(),
        )
        return res.output

    async def generate_structured(self, prompt: str, schema: dict[str, Any]) -> str:
        from google.genai import types

        resp = await self._genai_client().aio.models.generate_content(
            model=self.model_name,
            contents=prompt,
            config=types.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=schema,
                temperature=self.temperature,
            ),
        )
        text = resp.text or ""
        logger.debug("Structured response of %d chars", len(text))
        return text
