"""Single-learner quiz session driven by generated questions.

State moves ``empty -> loading -> active <-> answered -> complete``, with
``restart`` going from ``complete`` back through ``loading``. Calls made in a
state where they do not apply are ignored and return ``False``. Scoring is a
strict, case-sensitive string comparison with the question's correct answer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from studiq.core.logging import get_logger
from studiq.modules.ai.results import ErrorKind
from studiq.modules.common.requests import RequestTracker
from studiq.modules.quiz.models import (
    QuestionView,
    QuizQuestion,
    QuizSnapshot,
    QuizState,
)

if TYPE_CHECKING:
    from studiq.modules.ai.gateway import AIGateway

logger = get_logger(__name__)


class QuizEngine:
    def __init__(self, gateway: "AIGateway") -> None:
        self._gateway = gateway
        self._requests = RequestTracker()
        self.state: QuizState = QuizState.EMPTY
        self.questions: list[QuizQuestion] = []
        self.index: int = 0
        self.score: int = 0
        self.selected_option: Optional[str] = None
        self.last_error: Optional[ErrorKind] = None

    @property
    def in_flight(self) -> bool:
        return self._requests.in_flight

    @property
    def current(self) -> Optional[QuizQuestion]:
        if 0 <= self.index < len(self.questions):
            return self.questions[self.index]
        return None

    @property
    def answered(self) -> bool:
        return self.state == QuizState.ANSWERED

    def _clear_session(self) -> None:
        self.questions = []
        self.index = 0
        self.score = 0
        self.selected_option = None

    # Lifecycle ----------------------------------------------------------
    async def start(self, context: str) -> bool:
        """Generate a fresh set of questions and open the quiz at question 0."""
        if not (context or "").strip():
            logger.info("Quiz start ignored: no study context")
            return False
        ticket = self._requests.begin()
        if ticket is None:
            logger.info("Quiz start ignored: generation already in flight")
            return False

        self._clear_session()
        self.last_error = None
        self.state = QuizState.LOADING
        try:
            result = await self._gateway.request_quiz(context)
        finally:
            self._requests.finish(ticket)

        if not self._requests.is_current(ticket):
            logger.info("Discarding stale quiz result (generation %d)", ticket.generation)
            return False

        self.questions = list(result.value)
        self.last_error = result.error_kind
        self.index = 0
        self.score = 0
        self.selected_option = None
        # An active quiz with no questions is the displayable "no quiz" state
        self.state = QuizState.ACTIVE
        logger.info("Quiz ready with %d question(s)", len(self.questions))
        return True

    async def restart(self, context: str) -> bool:
        if self.state != QuizState.COMPLETE:
            return False
        return await self.start(context)

    def reset(self) -> None:
        """Drop the session; any generation still in flight becomes stale."""
        self._requests.invalidate()
        self._clear_session()
        self.last_error = None
        self.state = QuizState.EMPTY

    # Answering ----------------------------------------------------------
    def select_option(self, option: str) -> bool:
        question = self.current
        if self.state != QuizState.ACTIVE or question is None:
            return False
        self.selected_option = option
        self.state = QuizState.ANSWERED
        if option == question.correct_answer:
            self.score += 1
        return True

    def advance(self) -> bool:
        if self.state != QuizState.ANSWERED:
            return False
        if self.index >= len(self.questions) - 1:
            self.state = QuizState.COMPLETE
            logger.info("Quiz complete: %d/%d", self.score, len(self.questions))
            return True
        self.index += 1
        self.selected_option = None
        self.state = QuizState.ACTIVE
        return True

    def snapshot(self) -> QuizSnapshot:
        current: Optional[QuestionView] = None
        question = self.current
        if question is not None and self.state in (QuizState.ACTIVE, QuizState.ANSWERED):
            current = QuestionView(question=question.question, options=list(question.options))
            if self.state == QuizState.ANSWERED:
                current.selected_option = self.selected_option
                current.is_correct = self.selected_option == question.correct_answer
                current.correct_answer = question.correct_answer
                current.explanation = question.explanation
        return QuizSnapshot(
            state=self.state,
            index=self.index,
            total=len(self.questions),
            score=self.score,
            current=current,
            error=self.last_error.value if self.last_error else None,
        )
