from __future__ import annotations

from fastapi import APIRouter, Depends

from studiq.apis.deps import require_context, signed_in_workspace
from studiq.apis.quiz.schemas import AnswerRequest, QuizActionResponse
from studiq.core.config import settings
from studiq.modules.quiz.models import QuizSnapshot
from studiq.modules.workspace import StudyWorkspace


router = APIRouter()

NO_CONTEXT = "Add some lecture notes before generating a quiz."


@router.get(f"/{settings.app.version}/quiz", response_model=QuizSnapshot, tags=["quiz"])
async def get_quiz(workspace: StudyWorkspace = Depends(signed_in_workspace)) -> QuizSnapshot:
    return workspace.quiz.snapshot()


@router.post(
    f"/{settings.app.version}/quiz/start", response_model=QuizActionResponse, tags=["quiz"]
)
async def start_quiz(
    workspace: StudyWorkspace = Depends(signed_in_workspace),
) -> QuizActionResponse:
    context = require_context(workspace, NO_CONTEXT)
    accepted = await workspace.quiz.start(context)
    return QuizActionResponse(accepted=accepted, quiz=workspace.quiz.snapshot())


@router.post(
    f"/{settings.app.version}/quiz/answer", response_model=QuizActionResponse, tags=["quiz"]
)
async def answer_question(
    req: AnswerRequest, workspace: StudyWorkspace = Depends(signed_in_workspace)
) -> QuizActionResponse:
    accepted = workspace.quiz.select_option(req.option)
    return QuizActionResponse(accepted=accepted, quiz=workspace.quiz.snapshot())


@router.post(
    f"/{settings.app.version}/quiz/next", response_model=QuizActionResponse, tags=["quiz"]
)
async def next_question(
    workspace: StudyWorkspace = Depends(signed_in_workspace),
) -> QuizActionResponse:
    accepted = workspace.quiz.advance()
    return QuizActionResponse(accepted=accepted, quiz=workspace.quiz.snapshot())


@router.post(
    f"/{settings.app.version}/quiz/restart",
    response_model=QuizActionResponse,
    tags=["quiz"],
)
async def restart_quiz(
    workspace: StudyWorkspace = Depends(signed_in_workspace),
) -> QuizActionResponse:
    context = require_context(workspace, NO_CONTEXT)
    accepted = await workspace.quiz.restart(context)
    return QuizActionResponse(accepted=accepted, quiz=workspace.quiz.snapshot())
