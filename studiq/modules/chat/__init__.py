"""Tutor chat module exports."""

from .models import ChatMessage, ChatRole
from .session import TutorChatSession

__all__ = [
    "ChatMessage",
    "ChatRole",
    "TutorChatSession",
]
