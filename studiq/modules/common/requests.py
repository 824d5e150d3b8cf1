"""In-flight gating and staleness tracking for outstanding gateway calls.

Each consumer owns one tracker. ``begin`` hands out a ticket tagged with the
current generation, or ``None`` while a call is already outstanding.
``invalidate`` bumps the generation so that a result arriving for an older
ticket can be recognised and dropped.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Ticket:
    generation: int


class RequestTracker:
    def __init__(self) -> None:
        self._generation = 0
        self._in_flight: Optional[Ticket] = None

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def in_flight(self) -> bool:
        return self._in_flight is not None

    def begin(self) -> Optional[Ticket]:
        if self._in_flight is not None:
            return None
        self._generation += 1
        self._in_flight = Ticket(self._generation)
        return self._in_flight

    def is_current(self, ticket: Ticket) -> bool:
        return ticket.generation == self._generation

    def finish(self, ticket: Ticket) -> None:
        if self._in_flight == ticket:
            self._in_flight = None

    def invalidate(self) -> None:
        self._generation += 1
        self._in_flight = None
