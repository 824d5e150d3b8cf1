"""Pydantic models for quiz questions and quiz session snapshots.

Question records keep the camelCase wire names the generator is asked to
emit (``correctAnswer``) as aliases, so the same model validates upstream
JSON and serializes API responses.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class QuizQuestion(BaseModel):
    """A single multiple-choice question."""

    model_config = ConfigDict(populate_by_name=True)

    question: str
    options: list[str]
    correct_answer: str = Field(alias="correctAnswer")
    explanation: str

    @property
    def answerable(self) -> bool:
        return self.correct_answer in self.options


class QuizState(str, Enum):
    EMPTY = "empty"
    LOADING = "loading"
    ACTIVE = "active"
    ANSWERED = "answered"
    COMPLETE = "complete"


class QuestionView(BaseModel):
    """The current question as shown to the learner.

    The correct answer and explanation are only revealed once answered.
    """

    model_config = ConfigDict(populate_by_name=True)

    question: str
    options: list[str]
    selected_option: Optional[str] = Field(default=None, alias="selectedOption")
    is_correct: Optional[bool] = Field(default=None, alias="isCorrect")
    correct_answer: Optional[str] = Field(default=None, alias="correctAnswer")
    explanation: Optional[str] = None


class QuizSnapshot(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    state: QuizState
    index: int = 0
    total: int = 0
    score: int = 0
    current: Optional[QuestionView] = None
    error: Optional[str] = None
