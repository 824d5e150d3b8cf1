"""Per-session application state and the in-process workspace registry.

A ``StudyWorkspace`` is the explicit root of everything one learner's session
holds: the signed-in user, the shared study context and the components that
consume it. Workspaces are kept in-process only and swept when idle.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Callable, Optional

from studiq.core.logging import get_logger
from studiq.core.storage import KeyValueStore, NamespacedStore
from studiq.modules.ai.gateway import AIGateway
from studiq.modules.auth import AuthService, User
from studiq.modules.chat import TutorChatSession
from studiq.modules.context import StudyContextStore
from studiq.modules.flashcards import FlashcardDeck
from studiq.modules.quiz import QuizEngine
from studiq.modules.study import Summarizer
from studiq.modules.timer import SessionTimer

logger = get_logger(__name__)


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


class StudyWorkspace:
    def __init__(
        self,
        session_id: str,
        *,
        gateway: AIGateway,
        auth: AuthService,
        timer_interval: float = 1.0,
        auto_tick: bool = True,
    ) -> None:
        self.id = session_id
        self.auth = auth
        self.context = StudyContextStore()
        self.quiz = QuizEngine(gateway)
        self.deck = FlashcardDeck(gateway)
        self.chat = TutorChatSession(gateway)
        self.summarizer = Summarizer(gateway)
        self.timer = SessionTimer(interval=timer_interval, auto_tick=auto_tick)
        self.user: Optional[User] = auth.restore()
        self.created_at = _now_utc()
        self.last_activity = self.created_at

    @property
    def has_user(self) -> bool:
        return self.user is not None

    def touch(self) -> None:
        self.last_activity = _now_utc()

    # Sign-in stub -------------------------------------------------------
    def login(self, *, email: str, name: Optional[str] = None) -> User:
        self.user = self.auth.login(email=email, name=name)
        logger.info("Signed in", extra={"session_id": self.id})
        return self.user

    def login_with_google(self) -> User:
        self.user = self.auth.login_with_google()
        return self.user

    def logout(self) -> None:
        self.auth.logout()
        self.user = None
        logger.info("Signed out", extra={"session_id": self.id})

    async def close(self) -> None:
        """Tear down: stop the timer and make any pending results stale."""
        self.quiz.reset()
        self.deck.reset()
        self.chat.clear()
        self.summarizer.reset()
        await self.timer.close()


class WorkspaceManager:
    def __init__(
        self,
        *,
        gateway_factory: Callable[[], AIGateway],
        store: KeyValueStore,
        timer_interval: float = 1.0,
        auto_tick: bool = True,
    ) -> None:
        self.workspaces: dict[str, StudyWorkspace] = {}
        self._gateway_factory = gateway_factory
        self._gateway: Optional[AIGateway] = None
        self._store = store
        self._timer_interval = timer_interval
        self._auto_tick = auto_tick
        self._cleanup_task: Optional[asyncio.Task] = None
        self._idle_seconds: int = 3600
        self._sweep_interval: int = 60

    @property
    def gateway(self) -> AIGateway:
        if self._gateway is None:
            self._gateway = self._gateway_factory()
        return self._gateway

    def get(self, session_id: str) -> Optional[StudyWorkspace]:
        return self.workspaces.get(session_id)

    def get_or_create(self, session_id: str) -> StudyWorkspace:
        ws = self.workspaces.get(session_id)
        if ws is None:
            ws = StudyWorkspace(
                session_id,
                gateway=self.gateway,
                auth=AuthService(NamespacedStore(self._store, session_id)),
                timer_interval=self._timer_interval,
                auto_tick=self._auto_tick,
            )
            self.workspaces[session_id] = ws
            logger.info("Workspace created", extra={"session_id": session_id})
        ws.touch()
        return ws

    async def remove(self, session_id: str) -> None:
        ws = self.workspaces.pop(session_id, None)
        if ws is not None:
            await ws.close()

    async def close_all(self) -> None:
        for session_id in list(self.workspaces):
            await self.remove(session_id)

    # Cleanup loop -------------------------------------------------------
    def start(self, *, idle_seconds: int = 3600, sweep_interval: int = 60) -> None:
        self._idle_seconds = max(60, int(idle_seconds))
        self._sweep_interval = max(5, int(sweep_interval))
        if self._cleanup_task and not self._cleanup_task.done():
            return
        self._cleanup_task = asyncio.create_task(self._cleanup_loop())

    async def stop(self) -> None:
        if self._cleanup_task and not self._cleanup_task.done():
            self._cleanup_task.cancel()
            try:
                await self._cleanup_task
            except asyncio.CancelledError:
                pass
        self._cleanup_task = None
        await self.close_all()

    async def sweep(self) -> list[str]:
        """Close workspaces idle for longer than the configured limit."""
        now = _now_utc()
        expired = [
            sid
            for sid, ws in self.workspaces.items()
            if (now - ws.last_activity).total_seconds() > self._idle_seconds
            and not ws.timer.running
        ]
        for sid in expired:
            await self.remove(sid)
        if expired:
            logger.info("Swept %d idle workspace(s)", len(expired))
        return expired

    async def _cleanup_loop(self) -> None:
        try:
            while True:
                await asyncio.sleep(self._sweep_interval)
                await self.sweep()
        except asyncio.CancelledError:
            return
