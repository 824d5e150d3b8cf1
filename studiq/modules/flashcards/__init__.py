"""Flashcards module exports."""

from .models import DeckSnapshot, DeckState, Flashcard
from .deck import FlashcardDeck

__all__ = [
    "DeckSnapshot",
    "DeckState",
    "Flashcard",
    "FlashcardDeck",
]
