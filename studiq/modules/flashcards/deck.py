"""Navigable, flippable deck of generated flashcards."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from studiq.core.logging import get_logger
from studiq.modules.ai.results import ErrorKind
from studiq.modules.common.requests import RequestTracker
from studiq.modules.flashcards.models import DeckSnapshot, DeckState, Flashcard

if TYPE_CHECKING:
    from studiq.modules.ai.gateway import AIGateway

logger = get_logger(__name__)


class FlashcardDeck:
    def __init__(self, gateway: "AIGateway") -> None:
        self._gateway = gateway
        self._requests = RequestTracker()
        self.state: DeckState = DeckState.EMPTY
        self.cards: list[Flashcard] = []
        self.index: int = 0
        self.flipped: bool = False
        self.last_error: Optional[ErrorKind] = None

    @property
    def in_flight(self) -> bool:
        return self._requests.in_flight

    @property
    def current(self) -> Optional[Flashcard]:
        if 0 <= self.index < len(self.cards):
            return self.cards[self.index]
        return None

    async def generate(self, context: str) -> bool:
        if not (context or "").strip():
            logger.info("Deck generation ignored: no study context")
            return False
        ticket = self._requests.begin()
        if ticket is None:
            logger.info("Deck generation ignored: already in flight")
            return False

        self.state = DeckState.LOADING
        try:
            result = await self._gateway.request_flashcards(context)
        finally:
            self._requests.finish(ticket)

        if not self._requests.is_current(ticket):
            logger.info("Discarding stale flashcards (generation %d)", ticket.generation)
            return False

        self.last_error = result.error_kind
        self.cards = list(result.value)
        self.index = 0
        self.flipped = False
        self.state = DeckState.ACTIVE
        logger.info("Deck ready with %d card(s)", len(self.cards))
        return True

    def reset(self) -> None:
        self._requests.invalidate()
        self.cards = []
        self.index = 0
        self.flipped = False
        self.last_error = None
        self.state = DeckState.EMPTY

    def flip(self) -> bool:
        if self.current is None:
            return False
        self.flipped = not self.flipped
        return True

    def next(self) -> bool:
        if not self.cards:
            return False
        moved = self.index < len(self.cards) - 1
        if moved:
            self.index += 1
        self.flipped = False
        return moved

    def previous(self) -> bool:
        if not self.cards:
            return False
        moved = self.index > 0
        if moved:
            self.index -= 1
        self.flipped = False
        return moved

    def snapshot(self) -> DeckSnapshot:
        return DeckSnapshot(
            state=self.state,
            index=self.index,
            total=len(self.cards),
            flipped=self.flipped,
            card=self.current,
            error=self.last_error.value if self.last_error else None,
        )
