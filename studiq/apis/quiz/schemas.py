from __future__ import annotations

from pydantic import BaseModel, Field

from studiq.modules.quiz.models import QuizSnapshot


class AnswerRequest(BaseModel):
    option: str = Field(..., description="The option text exactly as offered")


class QuizActionResponse(BaseModel):
    accepted: bool
    quiz: QuizSnapshot
