import asyncio
import json
from typing import Any, Optional, Sequence

from studiq.modules.ai.gateway import AIGateway


def make_questions(n: int = 5) -> list[dict]:
    return [
        {
            "question": f"Question {i}?",
            "options": [f"A{i}", f"B{i}", f"C{i}", f"D{i}"],
            "correctAnswer": f"B{i}",
            "explanation": f"B{i} is right.",
        }
        for i in range(1, n + 1)
    ]


PHOTOSYNTHESIS_CARDS = [
    {"front": "What is photosynthesis?", "back": "Converting light into chemical energy."},
    {"front": "Where does it happen?", "back": "In the chloroplasts."},
    {"front": "Main pigment?", "back": "Chlorophyll."},
    {"front": "Gas taken in?", "back": "Carbon dioxide."},
    {"front": "Gas released?", "back": "Oxygen."},
    {"front": "Sugar produced?", "back": "Glucose."},
]

QUIZ_JSON = json.dumps(make_questions())
CARDS_JSON = json.dumps(PHOTOSYNTHESIS_CARDS)


class FakeClient:
    """In-memory GenerativeClient recording every call."""

    def __init__(
        self,
        *,
        text: str = "- a summary",
        structured: str = "[]",
        error: Optional[Exception] = None,
    ) -> None:
        self.text = text
        self.structured = structured
        self.error = error
        self.calls: list[dict[str, Any]] = []

    async def generate_text(
        self,
        prompt: str,
        *,
        system_instruction: Optional[str] = None,
        history: Sequence = (),
        image: Optional[bytes] = None,
        image_mime_type: str = "image/jpeg",
    ) -> str:
        self.calls.append(
            {
                "kind": "text",
                "prompt": prompt,
                "system_instruction": system_instruction,
                "history": list(history),
                "image": image,
            }
        )
        if self.error:
            raise self.error
        return self.text

    async def generate_structured(self, prompt: str, schema: dict) -> str:
        self.calls.append({"kind": "structured", "prompt": prompt, "schema": schema})
        if self.error:
            raise self.error
        return self.structured


class GatedClient(FakeClient):
    """FakeClient whose calls block until ``release`` is called."""

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._gate = asyncio.Event()
        self.entered = asyncio.Event()

    def release(self) -> None:
        self._gate.set()

    async def generate_text(self, prompt: str, **kwargs: Any) -> str:
        self.entered.set()
        await self._gate.wait()
        return await super().generate_text(prompt, **kwargs)

    async def generate_structured(self, prompt: str, schema: dict) -> str:
        self.entered.set()
        await self._gate.wait()
        return await super().generate_structured(prompt, schema)


def gateway_for(client: FakeClient) -> AIGateway:
    return AIGateway(client)
