from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from studiq.apis.deps import signed_in_workspace
from studiq.core.config import settings
from studiq.modules.timer import SessionTimer, format_elapsed
from studiq.modules.workspace import StudyWorkspace


router = APIRouter()


class StudyModeRequest(BaseModel):
    running: bool


class TimerResponse(BaseModel):
    running: bool
    elapsed: int
    display: str


def _timer_response(timer: SessionTimer) -> TimerResponse:
    return TimerResponse(
        running=timer.running, elapsed=timer.elapsed, display=format_elapsed(timer.elapsed)
    )


@router.get(f"/{settings.app.version}/timer", response_model=TimerResponse, tags=["timer"])
async def get_timer(workspace: StudyWorkspace = Depends(signed_in_workspace)) -> TimerResponse:
    return _timer_response(workspace.timer)


@router.put(f"/{settings.app.version}/timer", response_model=TimerResponse, tags=["timer"])
async def set_study_mode(
    req: StudyModeRequest, workspace: StudyWorkspace = Depends(signed_in_workspace)
) -> TimerResponse:
    workspace.timer.set_running(req.running)
    return _timer_response(workspace.timer)


@router.post(
    f"/{settings.app.version}/timer/toggle", response_model=TimerResponse, tags=["timer"]
)
async def toggle_study_mode(
    workspace: StudyWorkspace = Depends(signed_in_workspace),
) -> TimerResponse:
    workspace.timer.toggle()
    return _timer_response(workspace.timer)
