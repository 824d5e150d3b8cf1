"""Tutor chat transcript with one outstanding reply at a time."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from studiq.core.logging import get_logger
from studiq.modules.ai.results import ErrorKind
from studiq.modules.chat.models import ChatMessage, ChatRole
from studiq.modules.common.requests import RequestTracker

if TYPE_CHECKING:
    from studiq.modules.ai.gateway import AIGateway

logger = get_logger(__name__)


class TutorChatSession:
    """Append-only transcript of user/model turns.

    The user's turn is appended before the reply is requested; the gateway
    sees the transcript as it was before that turn plus the new text.
    """

    def __init__(self, gateway: "AIGateway") -> None:
        self._gateway = gateway
        self._requests = RequestTracker()
        self._messages: list[ChatMessage] = []
        self.last_error: Optional[ErrorKind] = None

    @property
    def transcript(self) -> list[ChatMessage]:
        return list(self._messages)

    @property
    def in_flight(self) -> bool:
        return self._requests.in_flight

    async def send_message(self, text: str, context: str) -> bool:
        if not (text or "").strip():
            return False
        ticket = self._requests.begin()
        if ticket is None:
            logger.info("Chat message ignored: reply already in flight")
            return False

        history = list(self._messages)
        self._messages.append(ChatMessage(role=ChatRole.USER, text=text))
        try:
            result = await self._gateway.request_reply(history, text, context)
        finally:
            self._requests.finish(ticket)

        if not self._requests.is_current(ticket):
            logger.info("Discarding stale tutor reply (generation %d)", ticket.generation)
            return False

        self.last_error = result.error_kind
        self._messages.append(ChatMessage(role=ChatRole.MODEL, text=result.value))
        return True

    def clear(self) -> None:
        self._requests.invalidate()
        self._messages = []
        self.last_error = None
