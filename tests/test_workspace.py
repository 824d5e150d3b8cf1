import asyncio
import unittest
from datetime import timedelta

from studiq.core.storage import MemoryStore
from studiq.modules.ai.gateway import AIGateway
from studiq.modules.quiz import QuizState
from studiq.modules.workspace import WorkspaceManager
from tests.fakes import QUIZ_JSON, FakeClient, GatedClient


def make_manager(client=None, store=None) -> WorkspaceManager:
    client = client or FakeClient(structured=QUIZ_JSON)
    return WorkspaceManager(
        gateway_factory=lambda: AIGateway(client),
        store=store or MemoryStore(),
        auto_tick=False,
    )


class TestWorkspaceManager(unittest.IsolatedAsyncioTestCase):
    async def test_same_session_same_workspace(self):
        manager = make_manager()
        self.assertIs(manager.get_or_create("s1"), manager.get_or_create("s1"))
        self.assertIsNot(manager.get_or_create("s1"), manager.get_or_create("s2"))

    async def test_user_is_restored_for_returning_session(self):
        store = MemoryStore()
        first = make_manager(store=store)
        first.get_or_create("tab-1").login(email="ada@example.com")

        again = make_manager(store=store).get_or_create("tab-1")

        self.assertTrue(again.has_user)
        self.assertEqual(again.user.email, "ada@example.com")
        self.assertFalse(make_manager(store=store).get_or_create("tab-2").has_user)

    async def test_logout_clears_user(self):
        ws = make_manager().get_or_create("s1")
        ws.login_with_google()
        ws.logout()
        self.assertFalse(ws.has_user)

    async def test_sweep_closes_idle_workspaces(self):
        manager = make_manager()
        idle = manager.get_or_create("idle")
        manager.get_or_create("fresh")
        idle.last_activity -= timedelta(hours=2)

        removed = await manager.sweep()

        self.assertEqual(removed, ["idle"])
        self.assertIsNone(manager.get("idle"))
        self.assertIsNotNone(manager.get("fresh"))

    async def test_running_timer_keeps_workspace(self):
        manager = make_manager()
        ws = manager.get_or_create("studying")
        ws.timer.set_running(True)
        ws.last_activity -= timedelta(hours=2)

        self.assertEqual(await manager.sweep(), [])

    async def test_close_discards_pending_results(self):
        client = GatedClient(structured=QUIZ_JSON)
        manager = make_manager(client=client)
        ws = manager.get_or_create("s1")

        pending = asyncio.create_task(ws.quiz.start("notes"))
        await client.entered.wait()
        await manager.remove("s1")
        client.release()

        self.assertFalse(await pending)
        self.assertEqual(ws.quiz.state, QuizState.EMPTY)

    async def test_stop_tears_down_all_timers(self):
        manager = WorkspaceManager(
            gateway_factory=lambda: AIGateway(FakeClient()),
            store=MemoryStore(),
            timer_interval=0.01,
        )
        ws = manager.get_or_create("s1")
        manager.start(idle_seconds=60, sweep_interval=5)
        ws.timer.set_running(True)

        await manager.stop()

        self.assertFalse(ws.timer.running)
        self.assertIsNone(ws.timer._task)
        self.assertEqual(manager.workspaces, {})


if __name__ == "__main__":
    unittest.main()
