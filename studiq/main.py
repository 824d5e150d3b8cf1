from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from studiq.apis.auth import router as auth_router
from studiq.apis.flashcards import router as flashcards_router
from studiq.apis.quiz import router as quiz_router
from studiq.apis.study import router as study_router
from studiq.apis.timer import router as timer_router
from studiq.core.config import settings
from studiq.core.logging import get_logger
from studiq.core.storage import JsonFileStore, KeyValueStore, MemoryStore
from studiq.modules.ai.client import GeminiClient
from studiq.modules.ai.gateway import AIGateway
from studiq.modules.workspace import WorkspaceManager

logger = get_logger(__name__)


def build_store() -> KeyValueStore:
    if settings.study.data_dir:
        return JsonFileStore(Path(settings.study.data_dir) / "store.json")
    return MemoryStore()


def build_gateway() -> AIGateway:
    return AIGateway(
        GeminiClient(),
        quiz_size=settings.study.quiz_size,
        deck_size=settings.study.deck_size,
    )


def build_manager() -> WorkspaceManager:
    return WorkspaceManager(
        gateway_factory=build_gateway,
        store=build_store(),
        timer_interval=settings.study.timer_interval,
    )


def create_app(manager: Optional[WorkspaceManager] = None) -> FastAPI:
    workspaces = manager or build_manager()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        workspaces.start(
            idle_seconds=settings.study.idle_seconds,
            sweep_interval=settings.study.sweep_interval,
        )
        logger.info("Workspace sweeper started")
        try:
            yield
        finally:
            await workspaces.stop()

    app = FastAPI(
        title=settings.app.name, version=settings.app.version, lifespan=lifespan
    )
    app.state.workspaces = workspaces

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:3000", "http://localhost:5173"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(auth_router)
    app.include_router(study_router)
    app.include_router(quiz_router)
    app.include_router(flashcards_router)
    app.include_router(timer_router)

    @app.get("/")
    async def root():
        return {
            "status": "ok",
            "app": settings.app.name,
            "version": settings.app.version,
        }

    return app


app = create_app()
