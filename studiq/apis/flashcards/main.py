from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from studiq.apis.deps import require_context, signed_in_workspace
from studiq.core.config import settings
from studiq.modules.flashcards.models import DeckSnapshot
from studiq.modules.workspace import StudyWorkspace


router = APIRouter()


class DeckActionResponse(BaseModel):
    accepted: bool
    deck: DeckSnapshot


def _respond(workspace: StudyWorkspace, accepted: bool) -> DeckActionResponse:
    return DeckActionResponse(accepted=accepted, deck=workspace.deck.snapshot())


@router.get(
    f"/{settings.app.version}/flashcards", response_model=DeckSnapshot, tags=["flashcards"]
)
async def get_deck(workspace: StudyWorkspace = Depends(signed_in_workspace)) -> DeckSnapshot:
    return workspace.deck.snapshot()


@router.post(
    f"/{settings.app.version}/flashcards/generate",
    response_model=DeckActionResponse,
    tags=["flashcards"],
)
async def generate_deck(
    workspace: StudyWorkspace = Depends(signed_in_workspace),
) -> DeckActionResponse:
    context = require_context(workspace, "Add some study notes to generate flashcards.")
    accepted = await workspace.deck.generate(context)
    return _respond(workspace, accepted)


@router.post(
    f"/{settings.app.version}/flashcards/flip",
    response_model=DeckActionResponse,
    tags=["flashcards"],
)
async def flip_card(
    workspace: StudyWorkspace = Depends(signed_in_workspace),
) -> DeckActionResponse:
    return _respond(workspace, workspace.deck.flip())


@router.post(
    f"/{settings.app.version}/flashcards/next",
    response_model=DeckActionResponse,
    tags=["flashcards"],
)
async def next_card(
    workspace: StudyWorkspace = Depends(signed_in_workspace),
) -> DeckActionResponse:
    return _respond(workspace, workspace.deck.next())


@router.post(
    f"/{settings.app.version}/flashcards/previous",
    response_model=DeckActionResponse,
    tags=["flashcards"],
)
async def previous_card(
    workspace: StudyWorkspace = Depends(signed_in_workspace),
) -> DeckActionResponse:
    return _respond(workspace, workspace.deck.previous())
