"""AI gateway: prompt construction, schema-constrained generation and parsing.

Every failure is caught here. Transport problems (network, provider errors)
and shape problems (invalid JSON, records not matching the declared schema)
both come back as a ``GatewayResult`` carrying the documented fallback value,
so nothing raised by the provider reaches consumer state.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence, TypeVar

from pydantic import TypeAdapter, ValidationError

from studiq.core.logging import get_logger
from studiq.modules.ai.client import GenerativeClient
from studiq.modules.ai.prompts import (
    DECK_SIZE,
    FLASHCARDS_RESPONSE_SCHEMA,
    QUIZ_RESPONSE_SCHEMA,
    QUIZ_SIZE,
    build_flashcards_prompt,
    build_quiz_prompt,
    build_summary_prompt,
    build_tutor_instruction,
)
from studiq.modules.ai.results import ErrorKind, GatewayResult
from studiq.modules.chat.models import ChatMessage
from studiq.modules.flashcards.models import Flashcard
from studiq.modules.quiz.models import QuizQuestion

logger = get_logger(__name__)

T = TypeVar("T")

SUMMARY_ERROR = "Error generating summary."
SUMMARY_EMPTY = "Failed to generate summary."
SUMMARY_NO_CONTEXT = "Add some study notes to summarize first."
CHAT_ERROR = "Error connecting to AI tutor."
CHAT_EMPTY = "I'm sorry, I couldn't process that."

_quiz_adapter: TypeAdapter[list[QuizQuestion]] = TypeAdapter(list[QuizQuestion])
_cards_adapter: TypeAdapter[list[Flashcard]] = TypeAdapter(list[Flashcard])


class ShapeError(ValueError):
    """Upstream text could not be turned into the declared records."""


def parse_records(adapter: TypeAdapter[list[T]], raw: str) -> list[T]:
    """Validate raw JSON text against a list-of-records adapter."""
    text = (raw or "").strip()
    if not text:
        return []
    try:
        return adapter.validate_json(text)
    except ValidationError as e:
        raise ShapeError(f"{e.error_count()} validation error(s): {e.errors()[0]['msg']}") from e


def _clean_questions(questions: list[QuizQuestion], n: int) -> list[QuizQuestion]:
    out: list[QuizQuestion] = []
    for q in questions:
        options = [str(o).strip() for o in q.options if str(o).strip()]
        text = q.question.strip()
        if not text or not options:
            logger.warning("Dropping malformed quiz question: %r", q.question[:80])
            continue
        cleaned = QuizQuestion(
            question=text,
            options=options,
            correct_answer=q.correct_answer.strip(),
            explanation=q.explanation.strip(),
        )
        if len(options) != 4:
            logger.warning("Quiz question has %d options: %r", len(options), text[:80])
        if not cleaned.answerable:
            # Kept: scoring simply never credits it
            logger.warning(
                "Quiz question correctAnswer not among options: %r", text[:80]
            )
        out.append(cleaned)
    return out[:n]


def _clean_cards(cards: list[Flashcard], n: int) -> list[Flashcard]:
    out: list[Flashcard] = []
    for c in cards:
        front = c.front.strip()
        back = c.back.strip()
        if front and back:
            out.append(Flashcard(front=front, back=back))
        else:
            logger.warning("Dropping flashcard with a blank face")
    return out[:n]


class AIGateway:
    """Study-feature operations over a ``GenerativeClient``."""

    def __init__(
        self,
        client: GenerativeClient,
        *,
        quiz_size: int = QUIZ_SIZE,
        deck_size: int = DECK_SIZE,
    ) -> None:
        self.client = client
        self.quiz_size = max(1, int(quiz_size))
        self.deck_size = max(1, int(deck_size))

    # Summary ------------------------------------------------------------
    async def request_summary(
        self,
        text: str,
        *,
        image: Optional[bytes] = None,
        image_mime_type: str = "image/jpeg",
    ) -> GatewayResult[str]:
        if not (text or "").strip() and image is None:
            return GatewayResult.empty(SUMMARY_NO_CONTEXT, detail="no context")
        try:
            out = await self.client.generate_text(
                build_summary_prompt(text or ""),
                image=image,
                image_mime_type=image_mime_type,
            )
        except Exception as e:  # noqa: BLE001
            logger.exception("Summary request failed")
            return GatewayResult.failure(SUMMARY_ERROR, ErrorKind.TRANSPORT, str(e))
        if not (out or "").strip():
            return GatewayResult.empty(SUMMARY_EMPTY)
        return GatewayResult.success(out)

    async def summarize(self, text: str) -> str:
        return (await self.request_summary(text)).value

    # Structured records -------------------------------------------------
    async def _request_records(
        self,
        *,
        label: str,
        prompt: str,
        schema: dict[str, Any],
        adapter: TypeAdapter[list[T]],
    ) -> GatewayResult[list[T]]:
        try:
            raw = await self.client.generate_structured(prompt, schema)
        except Exception as e:  # noqa: BLE001
            logger.exception("%s request failed", label)
            return GatewayResult.failure([], ErrorKind.TRANSPORT, str(e))
        try:
            records = parse_records(adapter, raw)
        except ShapeError as e:
            logger.error("Failed to parse %s JSON: %s", label, e)
            return GatewayResult.failure([], ErrorKind.SHAPE, str(e))
        return GatewayResult.success(records) if records else GatewayResult.empty([])

    async def request_quiz(self, context: str) -> GatewayResult[list[QuizQuestion]]:
        if not (context or "").strip():
            return GatewayResult.empty([], detail="no context")
        res = await self._request_records(
            label="quiz",
            prompt=build_quiz_prompt(context, self.quiz_size),
            schema=QUIZ_RESPONSE_SCHEMA,
            adapter=_quiz_adapter,
        )
        if not res.ok:
            return res
        questions = _clean_questions(res.value, self.quiz_size)
        return GatewayResult.success(questions) if questions else GatewayResult.empty([])

    async def generate_quiz(self, context: str) -> list[QuizQuestion]:
        return (await self.request_quiz(context)).value

    async def request_flashcards(self, context: str) -> GatewayResult[list[Flashcard]]:
        if not (context or "").strip():
            return GatewayResult.empty([], detail="no context")
        res = await self._request_records(
            label="flashcards",
            prompt=build_flashcards_prompt(context, self.deck_size),
            schema=FLASHCARDS_RESPONSE_SCHEMA,
            adapter=_cards_adapter,
        )
        if not res.ok:
            return res
        cards = _clean_cards(res.value, self.deck_size)
        return GatewayResult.success(cards) if cards else GatewayResult.empty([])

    async def generate_flashcards(self, context: str) -> list[Flashcard]:
        return (await self.request_flashcards(context)).value

    # Tutor chat ---------------------------------------------------------
    async def request_reply(
        self, history: Sequence[ChatMessage], message: str, context: str
    ) -> GatewayResult[str]:
        try:
            out = await self.client.generate_text(
                message,
                system_instruction=build_tutor_instruction(context or ""),
                history=list(history),
            )
        except Exception as e:  # noqa: BLE001
            logger.exception("Tutor chat request failed")
            return GatewayResult.failure(CHAT_ERROR, ErrorKind.TRANSPORT, str(e))
        if not (out or "").strip():
            return GatewayResult.empty(CHAT_EMPTY)
        return GatewayResult.success(out)

    async def chat(
        self, history: Sequence[ChatMessage], message: str, context: str
    ) -> str:
        return (await self.request_reply(history, message, context)).value
