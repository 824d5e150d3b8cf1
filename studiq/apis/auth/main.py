from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from studiq.apis.deps import get_workspace
from studiq.core.config import settings
from studiq.modules.auth import User
from studiq.modules.workspace import StudyWorkspace


router = APIRouter()


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=1)
    name: Optional[str] = None
    # Accepted for form parity only; never checked
    password: Optional[str] = None


class SessionResponse(BaseModel):
    user: Optional[User] = None


@router.post(f"/{settings.app.version}/auth/login", response_model=User, tags=["auth"])
async def login(
    request: LoginRequest, workspace: StudyWorkspace = Depends(get_workspace)
) -> User:
    return workspace.login(email=request.email, name=request.name)


@router.post(f"/{settings.app.version}/auth/google", response_model=User, tags=["auth"])
async def login_google(workspace: StudyWorkspace = Depends(get_workspace)) -> User:
    return workspace.login_with_google()


@router.post(
    f"/{settings.app.version}/auth/logout", response_model=SessionResponse, tags=["auth"]
)
async def logout(workspace: StudyWorkspace = Depends(get_workspace)) -> SessionResponse:
    workspace.logout()
    return SessionResponse(user=None)


@router.get(f"/{settings.app.version}/auth/me", response_model=SessionResponse, tags=["auth"])
async def me(workspace: StudyWorkspace = Depends(get_workspace)) -> SessionResponse:
    return SessionResponse(user=workspace.user)
