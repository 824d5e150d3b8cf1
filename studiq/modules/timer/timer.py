"""Study-mode elapsed time counter.

While running, an asyncio task adds one second per interval. Stopping keeps
the count; the background task is cancelled on stop and on ``close`` so no
tick outlives study mode or the owning workspace.
"""

from __future__ import annotations

import asyncio
from typing import Optional

from studiq.core.logging import get_logger

logger = get_logger(__name__)


def format_elapsed(seconds: int) -> str:
    h = seconds // 3600
    m = (seconds % 3600) // 60
    s = seconds % 60
    prefix = f"{h}h " if h > 0 else ""
    return f"{prefix}{m}m {s}s"


class SessionTimer:
    def __init__(self, *, interval: float = 1.0, auto_tick: bool = True) -> None:
        self.interval = max(0.001, float(interval))
        self.auto_tick = auto_tick
        self._running = False
        self._elapsed = 0
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._running

    @property
    def elapsed(self) -> int:
        return self._elapsed

    def set_running(self, running: bool) -> bool:
        """Switch study mode on or off; returns False when already in that state."""
        running = bool(running)
        if running == self._running:
            return False
        self._running = running
        if running:
            self._start_ticker()
        else:
            self._stop_ticker()
        logger.info("Study mode %s at %ds", "on" if running else "off", self._elapsed)
        return True

    def toggle(self) -> bool:
        return self.set_running(not self._running)

    def tick(self, seconds: int = 1) -> int:
        if self._running:
            self._elapsed += int(seconds)
        return self._elapsed

    def _start_ticker(self) -> None:
        if not self.auto_tick:
            return
        if self._task and not self._task.done():
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("No running event loop; timer will only advance on tick()")
            return
        self._task = loop.create_task(self._run())

    def _stop_ticker(self) -> None:
        if self._task and not self._task.done():
            self._task.cancel()
        self._task = None

    async def _run(self) -> None:
        try:
            while True:
                await asyncio.sleep(self.interval)
                self.tick()
        except asyncio.CancelledError:
            return

    async def close(self) -> None:
        task = self._task
        self._running = False
        self._stop_ticker()
        if task is not None:
            try:
                await task
            except asyncio.CancelledError:
                pass
