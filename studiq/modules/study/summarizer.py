from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from studiq.core.logging import get_logger
from studiq.modules.ai.results import ErrorKind
from studiq.modules.common.requests import RequestTracker

if TYPE_CHECKING:
    from studiq.modules.ai.gateway import AIGateway

logger = get_logger(__name__)


class Summarizer:
    """Holds the latest summary of the study context."""

    def __init__(self, gateway: "AIGateway") -> None:
        self._gateway = gateway
        self._requests = RequestTracker()
        self.summary: str = ""
        self.last_error: Optional[ErrorKind] = None

    @property
    def in_flight(self) -> bool:
        return self._requests.in_flight

    async def summarize(
        self,
        context: str,
        *,
        image: Optional[bytes] = None,
        image_mime_type: str = "image/jpeg",
    ) -> bool:
        if not (context or "").strip() and image is None:
            return False
        ticket = self._requests.begin()
        if ticket is None:
            logger.info("Summary ignored: already in flight")
            return False
        try:
            result = await self._gateway.request_summary(
                context, image=image, image_mime_type=image_mime_type
            )
        finally:
            self._requests.finish(ticket)

        if not self._requests.is_current(ticket):
            logger.info("Discarding stale summary (generation %d)", ticket.generation)
            return False
        self.summary = result.value
        self.last_error = result.error_kind
        return True

    def reset(self) -> None:
        self._requests.invalidate()
        self.summary = ""
        self.last_error = None
