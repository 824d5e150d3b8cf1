from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Header, HTTPException, Request, status

from studiq.modules.workspace import StudyWorkspace, WorkspaceManager


def get_manager(request: Request) -> WorkspaceManager:
    return request.app.state.workspaces


def get_workspace(
    x_session_id: Annotated[str, Header(min_length=1)],
    manager: WorkspaceManager = Depends(get_manager),
) -> StudyWorkspace:
    """Resolve the caller's workspace from the ``X-Session-Id`` header."""
    return manager.get_or_create(x_session_id)


def signed_in_workspace(
    workspace: StudyWorkspace = Depends(get_workspace),
) -> StudyWorkspace:
    """Study features are only offered once someone has signed in.

    This is a feature gate, not an access control check.
    """
    if not workspace.has_user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Sign in to use study tools"
        )
    return workspace


def require_context(workspace: StudyWorkspace, detail: str) -> str:
    if workspace.context.is_empty:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)
    return workspace.context.text
