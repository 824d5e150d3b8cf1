"""Pydantic models for flashcards and deck snapshots."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel


class Flashcard(BaseModel):
    """Simple front/back flashcard."""

    front: str
    back: str


class DeckState(str, Enum):
    EMPTY = "empty"
    LOADING = "loading"
    ACTIVE = "active"


class DeckSnapshot(BaseModel):
    state: DeckState
    index: int = 0
    total: int = 0
    flipped: bool = False
    card: Optional[Flashcard] = None
    error: Optional[str] = None
