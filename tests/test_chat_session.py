import asyncio
import unittest

from studiq.modules.ai.gateway import CHAT_ERROR, AIGateway
from studiq.modules.ai.results import ErrorKind
from studiq.modules.chat import ChatRole, TutorChatSession
from tests.fakes import FakeClient, GatedClient


class TestTutorChatSession(unittest.IsolatedAsyncioTestCase):
    async def test_appends_user_then_model_turn(self):
        client = FakeClient(text="Light energy becomes chemical energy.")
        session = TutorChatSession(AIGateway(client))

        self.assertTrue(await session.send_message("What is photosynthesis?", "leaf notes"))

        roles = [m.role for m in session.transcript]
        self.assertEqual(roles, [ChatRole.USER, ChatRole.MODEL])
        self.assertEqual(session.transcript[1].text, "Light energy becomes chemical energy.")

    async def test_gateway_sees_history_before_new_turn(self):
        client = FakeClient(text="ok")
        session = TutorChatSession(AIGateway(client))

        await session.send_message("first", "ctx")
        await session.send_message("second", "ctx")

        second_call = client.calls[1]
        self.assertEqual([m.text for m in second_call["history"]], ["first", "ok"])
        self.assertEqual(second_call["prompt"], "second")
        self.assertIn("Context: ctx", second_call["system_instruction"])

    async def test_blank_messages_are_rejected(self):
        client = FakeClient()
        session = TutorChatSession(AIGateway(client))

        self.assertFalse(await session.send_message("   \n", "ctx"))
        self.assertEqual(session.transcript, [])
        self.assertEqual(client.calls, [])

    async def test_send_while_in_flight_is_noop(self):
        client = GatedClient(text="reply")
        session = TutorChatSession(AIGateway(client))

        first = asyncio.create_task(session.send_message("one", "ctx"))
        await client.entered.wait()
        self.assertTrue(session.in_flight)
        self.assertEqual(len(session.transcript), 1)

        self.assertFalse(await session.send_message("two", "ctx"))
        self.assertEqual(len(session.transcript), 1)

        client.release()
        await first
        self.assertEqual([m.text for m in session.transcript], ["one", "reply"])
        self.assertFalse(session.in_flight)

    async def test_failure_appends_fallback_in_order(self):
        session = TutorChatSession(AIGateway(FakeClient(error=ConnectionError())))

        await session.send_message("hello?", "")

        self.assertEqual([m.text for m in session.transcript], ["hello?", CHAT_ERROR])
        self.assertEqual(session.last_error, ErrorKind.TRANSPORT)

    async def test_reply_after_clear_is_discarded(self):
        client = GatedClient(text="late")
        session = TutorChatSession(AIGateway(client))

        pending = asyncio.create_task(session.send_message("question", "ctx"))
        await client.entered.wait()
        session.clear()
        client.release()

        self.assertFalse(await pending)
        self.assertEqual(session.transcript, [])


if __name__ == "__main__":
    unittest.main()
