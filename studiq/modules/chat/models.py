from enum import Enum

from pydantic import BaseModel, Field


class ChatRole(str, Enum):
    USER = "user"
    MODEL = "model"


class ChatMessage(BaseModel):
    role: ChatRole = Field(..., description="Author of the turn: user or model")
    text: str = Field(..., description="Content of the message")
