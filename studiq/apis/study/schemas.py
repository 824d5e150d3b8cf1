from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from studiq.modules.chat.models import ChatMessage


class ContextRequest(BaseModel):
    text: str = ""


class ContextResponse(BaseModel):
    text: str
    empty: bool


class SummarizeRequest(BaseModel):
    # Either raw base64 or a data URL ("data:image/jpeg;base64,....")
    image: Optional[str] = None
    image_mime_type: str = "image/jpeg"


class SummaryResponse(BaseModel):
    accepted: bool
    summary: str
    in_flight: bool = False
    error: Optional[str] = None


class ChatRequest(BaseModel):
    text: str = Field(..., description="The learner's message")


class ChatResponse(BaseModel):
    accepted: bool
    messages: list[ChatMessage] = Field(default_factory=list)
    in_flight: bool = False
    error: Optional[str] = None
