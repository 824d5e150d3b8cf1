"""Prompt templates and declared response schemas for the study features.

The schemas use the Gemini structured-output vocabulary (upper-case type
names) and are the portable contract for the generated records: field names
here must match the aliases on ``QuizQuestion`` and ``Flashcard``.
"""

from __future__ import annotations

from typing import Any

QUIZ_SIZE = 5
DECK_SIZE = 6


QUIZ_RESPONSE_SCHEMA: dict[str, Any] = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {
            "question": {"type": "STRING"},
            "options": {"type": "ARRAY", "items": {"type": "STRING"}},
            "correctAnswer": {"type": "STRING"},
            "explanation": {"type": "STRING"},
        },
        "required": ["question", "options", "correctAnswer", "explanation"],
    },
}


FLASHCARDS_RESPONSE_SCHEMA: dict[str, Any] = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {
            "front": {"type": "STRING"},
            "back": {"type": "STRING"},
        },
        "required": ["front", "back"],
    },
}


def build_summary_prompt(text: str) -> str:
    return (
        "Please provide a concise, bulleted summary of the following study "
        "material. Focus on key concepts and definitions: \n\n"
        f"{text}"
    )


def build_quiz_prompt(context: str, n: int = QUIZ_SIZE) -> str:
    return (
        f"Based on the following study context, generate {int(n)} multiple "
        "choice questions. Return ONLY a valid JSON array of objects with keys: "
        "question, options (array of 4 strings), correctAnswer (matching one of "
        "the options), and explanation. \n\n"
        f"Context: {context}"
    )


def build_flashcards_prompt(context: str, n: int = DECK_SIZE) -> str:
    return (
        f"Based on the following context, generate {int(n)} study flashcards. "
        "Return ONLY a valid JSON array of objects with keys: front, back. \n\n"
        f"Context: {context}"
    )


def build_tutor_instruction(context: str) -> str:
    return (
        "You are Studiq AI, a friendly and helpful study tutor. Use the provided "
        "context to answer questions. If the user asks something outside the "
        "context, answer generally but try to relate it back to study "
        f"techniques. Context: {context}"
    )
