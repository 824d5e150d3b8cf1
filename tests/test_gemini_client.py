import unittest
from types import SimpleNamespace
from unittest.mock import patch

from pydantic_ai.messages import (
    BinaryContent,
    ModelMessage,
    ModelRequest,
    ModelResponse,
    TextPart,
    UserPromptPart,
)
from pydantic_ai.models.function import AgentInfo, FunctionModel

from studiq.core.config import settings
from studiq.modules.ai.client import GeminiClient, to_model_messages
from studiq.modules.ai.gateway import AIGateway
from studiq.modules.ai.prompts import QUIZ_RESPONSE_SCHEMA
from studiq.modules.ai.results import ErrorKind
from studiq.modules.chat.models import ChatMessage, ChatRole


class FakeModels:
    def __init__(self, text):
        self.text = text
        self.calls = []

    async def generate_content(self, **kwargs):
        self.calls.append(kwargs)
        return SimpleNamespace(text=self.text)


def fake_genai(text="[]"):
    models = FakeModels(text)
    return SimpleNamespace(aio=SimpleNamespace(models=models)), models


def user_prompts(message: ModelRequest) -> list:
    return [p.content for p in message.parts if isinstance(p, UserPromptPart)]


class TestHistoryMapping(unittest.TestCase):
    def test_roles_map_to_requests_and_responses(self):
        messages = to_model_messages(
            [
                ChatMessage(role=ChatRole.USER, text="hi"),
                ChatMessage(role=ChatRole.MODEL, text="hello"),
            ]
        )
        self.assertIsInstance(messages[0], ModelRequest)
        self.assertEqual(user_prompts(messages[0]), ["hi"])
        self.assertIsInstance(messages[1], ModelResponse)
        self.assertEqual(messages[1].parts[0].content, "hello")


class TestGeminiClientText(unittest.IsolatedAsyncioTestCase):
    async def test_runs_agent_with_history(self):
        seen: dict = {}

        def respond(messages: list[ModelMessage], info: AgentInfo) -> ModelResponse:
            seen["messages"] = messages
            return ModelResponse(parts=[TextPart(content="Because of chlorophyll.")])

        genai, _ = fake_genai()
        client = GeminiClient(model=FunctionModel(respond), genai_client=genai)
        history = [
            ChatMessage(role=ChatRole.USER, text="Are leaves green?"),
            ChatMessage(role=ChatRole.MODEL, text="Yes."),
        ]

        reply = await client.generate_text(
            "Why?", system_instruction="You are a tutor.", history=history
        )

        self.assertEqual(reply, "Because of chlorophyll.")
        messages = seen["messages"]
        self.assertEqual(len(messages), 3)
        self.assertEqual(user_prompts(messages[0]), ["Are leaves green?"])
        self.assertIsInstance(messages[1], ModelResponse)
        self.assertEqual(user_prompts(messages[-1]), ["Why?"])

    async def test_image_is_sent_as_binary_content(self):
        seen: dict = {}

        def respond(messages: list[ModelMessage], info: AgentInfo) -> ModelResponse:
            seen["content"] = user_prompts(messages[-1])[0]
            return ModelResponse(parts=[TextPart(content="- diagram of a leaf")])

        genai, _ = fake_genai()
        client = GeminiClient(model=FunctionModel(respond), genai_client=genai)

        await client.generate_text("Summarize", image=b"\x89PNG", image_mime_type="image/png")

        content = seen["content"]
        self.assertIsInstance(content[0], BinaryContent)
        self.assertEqual(content[0].media_type, "image/png")
        self.assertEqual(content[1], "Summarize")


class TestGeminiClientStructured(unittest.IsolatedAsyncioTestCase):
    async def test_requests_json_with_schema(self):
        genai, models = fake_genai('[{"front": "a", "back": "b"}]')
        client = GeminiClient(
            model=FunctionModel(lambda m, i: ModelResponse(parts=[])),
            genai_client=genai,
            model_name="test-model",
        )

        raw = await client.generate_structured("make cards", QUIZ_RESPONSE_SCHEMA)

        self.assertEqual(raw, '[{"front": "a", "back": "b"}]')
        call = models.calls[0]
        self.assertEqual(call["model"], "test-model")
        self.assertEqual(call["contents"], "make cards")
        self.assertEqual(call["config"].response_mime_type, "application/json")
        self.assertIsNotNone(call["config"].response_schema)

    async def test_missing_key_surfaces_as_transport_error(self):
        with patch.object(settings.gemini, "api_key", None):
            client = GeminiClient()
            with self.assertRaises(RuntimeError):
                await client.generate_structured("notes", QUIZ_RESPONSE_SCHEMA)

            res = await AIGateway(client).request_quiz("notes")

        self.assertEqual(res.value, [])
        self.assertEqual(res.error_kind, ErrorKind.TRANSPORT)


if __name__ == "__main__":
    unittest.main()
