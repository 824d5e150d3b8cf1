from __future__ import annotations

import base64
import binascii
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from studiq.apis.deps import get_workspace, require_context, signed_in_workspace
from studiq.apis.study.schemas import (
    ChatRequest,
    ChatResponse,
    ContextRequest,
    ContextResponse,
    SummarizeRequest,
    SummaryResponse,
)
from studiq.core.config import settings
from studiq.modules.workspace import StudyWorkspace


router = APIRouter()


def _context_response(workspace: StudyWorkspace) -> ContextResponse:
    return ContextResponse(text=workspace.context.text, empty=workspace.context.is_empty)


def _chat_response(workspace: StudyWorkspace, accepted: bool) -> ChatResponse:
    chat = workspace.chat
    return ChatResponse(
        accepted=accepted,
        messages=chat.transcript,
        in_flight=chat.in_flight,
        error=chat.last_error.value if chat.last_error else None,
    )


def _decode_image(data: Optional[str]) -> Optional[bytes]:
    if not data:
        return None
    payload = data.split(",", 1)[1] if data.startswith("data:") and "," in data else data
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Image is not valid base64"
        )


# Study context -------------------------------------------------------------
@router.get(
    f"/{settings.app.version}/context", response_model=ContextResponse, tags=["context"]
)
async def get_context(workspace: StudyWorkspace = Depends(get_workspace)) -> ContextResponse:
    return _context_response(workspace)


@router.put(
    f"/{settings.app.version}/context", response_model=ContextResponse, tags=["context"]
)
async def replace_context(
    req: ContextRequest, workspace: StudyWorkspace = Depends(get_workspace)
) -> ContextResponse:
    workspace.context.replace(req.text)
    return _context_response(workspace)


@router.post(
    f"/{settings.app.version}/context/append",
    response_model=ContextResponse,
    tags=["context"],
)
async def append_context(
    req: ContextRequest, workspace: StudyWorkspace = Depends(get_workspace)
) -> ContextResponse:
    workspace.context.append(req.text)
    return _context_response(workspace)


@router.delete(
    f"/{settings.app.version}/context", response_model=ContextResponse, tags=["context"]
)
async def clear_context(workspace: StudyWorkspace = Depends(get_workspace)) -> ContextResponse:
    workspace.context.clear()
    return _context_response(workspace)


@router.post(
    f"/{settings.app.version}/context/image",
    response_model=ContextResponse,
    tags=["context"],
)
async def attach_image(
    file: UploadFile = File(...),
    workspace: StudyWorkspace = Depends(signed_in_workspace),
) -> ContextResponse:
    data = await file.read()
    workspace.context.attach_image(data, filename=file.filename)
    return _context_response(workspace)


# Summary -------------------------------------------------------------------
@router.post(
    f"/{settings.app.version}/study/summarize",
    response_model=SummaryResponse,
    tags=["study"],
)
async def summarize(
    req: Optional[SummarizeRequest] = None,
    workspace: StudyWorkspace = Depends(signed_in_workspace),
) -> SummaryResponse:
    req = req or SummarizeRequest()
    context = require_context(workspace, "Add some study notes to summarize first.")
    summarizer = workspace.summarizer
    accepted = await summarizer.summarize(
        context,
        image=_decode_image(req.image),
        image_mime_type=req.image_mime_type,
    )
    return SummaryResponse(
        accepted=accepted,
        summary=summarizer.summary,
        in_flight=summarizer.in_flight,
        error=summarizer.last_error.value if summarizer.last_error else None,
    )


# Tutor chat ----------------------------------------------------------------
@router.get(
    f"/{settings.app.version}/study/chat", response_model=ChatResponse, tags=["study"]
)
async def get_chat(workspace: StudyWorkspace = Depends(signed_in_workspace)) -> ChatResponse:
    return _chat_response(workspace, accepted=True)


@router.post(
    f"/{settings.app.version}/study/chat", response_model=ChatResponse, tags=["study"]
)
async def send_chat(
    req: ChatRequest, workspace: StudyWorkspace = Depends(signed_in_workspace)
) -> ChatResponse:
    accepted = await workspace.chat.send_message(req.text, workspace.context.text)
    return _chat_response(workspace, accepted=accepted)


@router.delete(
    f"/{settings.app.version}/study/chat", response_model=ChatResponse, tags=["study"]
)
async def clear_chat(workspace: StudyWorkspace = Depends(signed_in_workspace)) -> ChatResponse:
    workspace.chat.clear()
    return _chat_response(workspace, accepted=True)
