"""Interaction state machine for one problem-solving session."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable

from math_mentor.media import split_data_uri
from math_mentor.models import Action, Message, MessageRole, SessionState
from math_mentor.prompts import HINT_DID_NOT_HELP
from math_mentor.transcript import Transcript

logger = logging.getLogger(__name__)


class TransitionError(RuntimeError):
    """Raised when an action is not allowed in the current state."""


class RequestKind(str, Enum):
    HINT = "hint"
    ANALYSIS = "analysis"


# State entered on dispatch -> state entered on resolve
_AWAITING = {
    RequestKind.HINT: SessionState.AWAITING_HINT,
    RequestKind.ANALYSIS: SessionState.AWAITING_ANALYSIS,
}
_RESOLVED = {
    RequestKind.HINT: SessionState.HINT_GIVEN,
    RequestKind.ANALYSIS: SessionState.ANALYSIS_GIVEN,
}


@dataclass(frozen=True)
class PendingRequest:
    """A dispatched tutor request waiting for its reply."""

    kind: RequestKind
    message_id: str
    image: str
    epoch: int

    @property
    def media_type(self) -> str:
        return split_data_uri(self.image)[0]

    @property
    def image_data(self) -> str:
        """Base64 image data with the data URI framing removed."""
        return split_data_uri(self.image)[1]


class TutoringSession:
    """Owns the transcript and current image and decides what may happen next.

    Requests are split into ``begin_hint``/``begin_analysis`` (dispatch) and
    ``resolve`` (reply arrived). Only the awaiting states lie between them,
    and no action is available there, so at most one request is ever in
    flight. ``resolve`` advances the state whatever the reply text is.
    """

    def __init__(self, session_id: str) -> None:
        self.session_id = session_id
        self.state = SessionState.IDLE
        self.transcript = Transcript()
        self.current_image: str | None = None
        # Bumped on reset so replies for a discarded session are dropped
        self._epoch = 0
        self.inflight: asyncio.Task | None = None

    @property
    def has_image(self) -> bool:
        return self.current_image is not None

    def available_actions(self) -> list[Action]:
        if self.state == SessionState.IDLE:
            return [Action.HINT] if self.has_image else [Action.UPLOAD]
        if self.state == SessionState.HINT_GIVEN:
            return [Action.ANALYSIS, Action.RESET]
        if self.state == SessionState.ANALYSIS_GIVEN:
            return [Action.RESET]
        return []

    def _require(self, action: Action) -> None:
        if action not in self.available_actions():
            raise TransitionError(
                f"Cannot {action.value} in state {self.state.value}"
                f"{' (image uploaded)' if self.has_image else ''}"
            )

    # -- transitions ---------------------------------------------------------

    def upload(self, data_uri: str) -> Message:
        """Attach the photo of the solution; the session stays IDLE."""
        self._require(Action.UPLOAD)
        message = Message.image(data_uri)
        self.current_image = data_uri
        self.transcript.append(message)
        return message

    def begin_hint(self) -> PendingRequest:
        self._require(Action.HINT)
        placeholder = Message.placeholder()
        self.transcript.append(placeholder)
        return self._dispatch(RequestKind.HINT, placeholder)

    def begin_analysis(self) -> PendingRequest:
        self._require(Action.ANALYSIS)
        placeholder = Message.placeholder()
        self.transcript.append(
            Message.text(MessageRole.STUDENT, HINT_DID_NOT_HELP),
            placeholder,
        )
        return self._dispatch(RequestKind.ANALYSIS, placeholder)

    def _dispatch(self, kind: RequestKind, placeholder: Message) -> PendingRequest:
        self.state = _AWAITING[kind]
        return PendingRequest(
            kind=kind,
            message_id=placeholder.id,
            image=self.current_image or "",
            epoch=self._epoch,
        )

    def resolve(self, pending: PendingRequest, text: str) -> bool:
        """Fill the placeholder with the tutor's reply and advance.

        Returns False when the reply belongs to a session that has been
        reset in the meantime; it is discarded.
        """
        if pending.epoch != self._epoch:
            logger.info(
                "Session %s dropped a stale %s reply", self.session_id, pending.kind.value
            )
            return False
        if self.state != _AWAITING[pending.kind]:
            raise TransitionError(
                f"Cannot resolve {pending.kind.value} in state {self.state.value}"
            )
        self.transcript.update(pending.message_id, text, is_pending=False)
        self.state = _RESOLVED[pending.kind]
        return True

    def start(self, pending: PendingRequest, reply: Awaitable[str]) -> asyncio.Task:
        """Run the tutor call for ``pending`` as a task owned by the session.

        The task resolves the placeholder when the reply arrives, whether
        or not any connection is still listening.
        """

        async def _complete() -> None:
            self.resolve(pending, await reply)

        self.inflight = asyncio.create_task(_complete())
        return self.inflight

    async def wait_for_reply(self) -> bool:
        """Wait for the in-flight request, if any. True if there was one."""
        task = self.inflight
        if task is None or task.done():
            return False
        # Shielded so a dropped connection does not cancel the request
        await asyncio.shield(task)
        return True

    def reset(self) -> None:
        """Discard the transcript and image and return to IDLE."""
        self.transcript.clear()
        self.current_image = None
        self.state = SessionState.IDLE
        self._epoch += 1

    # -- rendering -----------------------------------------------------------

    def snapshot(self) -> dict:
        """Everything the browser needs to render the chat and controls."""
        return {
            "session_id": self.session_id,
            "state": self.state.value,
            "has_image": self.has_image,
            "actions": [a.value for a in self.available_actions()],
            "messages": [m.model_dump(mode="json") for m in self.transcript],
        }
