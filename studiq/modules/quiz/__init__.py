"""Quiz module exports."""

from .models import QuizQuestion, QuizSnapshot, QuizState
from .engine import QuizEngine

__all__ = [
    "QuizQuestion",
    "QuizSnapshot",
    "QuizState",
    "QuizEngine",
]
