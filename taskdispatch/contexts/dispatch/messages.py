"""Chat message envelope and pre-detection screening."""

from dataclasses import dataclass
from typing import Optional

# Messages shorter than this are never tasks worth detecting
MIN_MESSAGE_LENGTH = 10


@dataclass(frozen=True)
class ChatMessage:
    """The parts of an incoming chat message the pipeline needs."""

    text: str
    user_id: Optional[str] = None
    team_id: Optional[str] = None
    is_automated: bool = False  # Bot or app author
    thread_id: Optional[str] = None
    message_id: Optional[str] = None

    @property
    def is_thread_reply(self) -> bool:
        return bool(self.thread_id) and self.thread_id != self.message_id


def should_screen_message(message: ChatMessage) -> bool:
    """
    True if the message must be skipped before detection.

    Skips automated authors, replies inside a thread (the thread root is the
    task), and text shorter than MIN_MESSAGE_LENGTH after trimming.
    """
    if message.is_automated or message.is_thread_reply:
        return True
    text = message.text if isinstance(message.text, str) else ""
    return len(text.strip()) < MIN_MESSAGE_LENGTH
