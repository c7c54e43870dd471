from __future__ import annotations

import uuid
from enum import Enum

from pydantic import BaseModel, Field


class MessageRole(str, Enum):
    STUDENT = "student"
    TUTOR = "tutor"


class MessageKind(str, Enum):
    TEXT = "text"
    IMAGE = "image"


class SessionState(str, Enum):
    IDLE = "IDLE"
    AWAITING_HINT = "AWAITING_HINT"
    HINT_GIVEN = "HINT_GIVEN"
    AWAITING_ANALYSIS = "AWAITING_ANALYSIS"
    ANALYSIS_GIVEN = "ANALYSIS_GIVEN"


class Action(str, Enum):
    """User-initiated events the browser may send over the WebSocket."""

    UPLOAD = "upload"
    HINT = "hint"
    ANALYSIS = "analysis"
    RESET = "reset"


def new_message_id() -> str:
    return uuid.uuid4().hex


class Message(BaseModel):
    id: str = Field(default_factory=new_message_id)
    role: MessageRole
    kind: MessageKind
    # Markdown for TEXT, a data URI for IMAGE
    content: str = ""
    is_pending: bool = False

    @classmethod
    def image(cls, data_uri: str) -> Message:
        return cls(role=MessageRole.STUDENT, kind=MessageKind.IMAGE, content=data_uri)

    @classmethod
    def text(cls, role: MessageRole, content: str) -> Message:
        return cls(role=role, kind=MessageKind.TEXT, content=content)

    @classmethod
    def placeholder(cls) -> Message:
        """A tutor message reserved before its content is known."""
        return cls(role=MessageRole.TUTOR, kind=MessageKind.TEXT, is_pending=True)
