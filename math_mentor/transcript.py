"""Ordered chat transcript for a single tutoring session."""

from __future__ import annotations

from typing import Iterator

from math_mentor.models import Message


class Transcript:
    """Append-only list of messages; insertion order is display order.

    The only mutation besides appending is resolving a pending placeholder
    in place. Messages are removed only by ``clear()`` on session reset.
    """

    def __init__(self) -> None:
        self._messages: list[Message] = []

    def append(self, *messages: Message) -> None:
        self._messages.extend(messages)

    def get(self, message_id: str) -> Message:
        for message in self._messages:
            if message.id == message_id:
                return message
        raise KeyError(f"Message {message_id} not found")

    def update(self, message_id: str, content: str, is_pending: bool = False) -> Message:
        """Fill a message in place. Repeating the same update is a no-op."""
        message = self.get(message_id)
        message.content = content
        message.is_pending = is_pending
        return message

    def pending(self) -> list[Message]:
        return [m for m in self._messages if m.is_pending]

    def clear(self) -> None:
        self._messages.clear()

    @property
    def messages(self) -> list[Message]:
        return list(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(list(self._messages))
