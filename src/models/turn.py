"""
Data models for the streaming chat client.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from core.domain import StreamEvent

NO_RESPONSE_MESSAGE = 'No response received.'


class TurnStatus(str, Enum):
    PENDING = 'pending'
    STREAMING = 'streaming'
    COMPLETE = 'complete'
    FAILED = 'failed'


TERMINAL_STATUSES = frozenset({TurnStatus.COMPLETE, TurnStatus.FAILED})


@dataclass
class Turn:
    """
    A single question and the answer streaming back for it.

    Complete and failed are terminal: once reached, nothing changes the turn.
    """
    turn_id: int
    question: str = ""
    accumulated_text: str = ""
    final_text: Optional[str] = None
    error_message: Optional[str] = None
    status: TurnStatus = TurnStatus.PENDING

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    @property
    def display_text(self) -> str:
        if self.status is TurnStatus.FAILED:
            return self.error_message or ""
        if self.final_text is not None:
            return self.final_text
        return self.accumulated_text

    def apply(self, event: StreamEvent) -> bool:
        """
        Apply a decoded stream event. Returns True if the turn changed.
        """
        if self.is_terminal:
            return False

        type = event['type']
        if type == 'token':
            self.accumulated_text += event['text']
            self.status = TurnStatus.STREAMING
        elif type == 'final':
            self.final_text = event['text']
            self.status = TurnStatus.COMPLETE
        elif type == 'error':
            self.error_message = event['message']
            self.status = TurnStatus.FAILED
        else:
            return False
        return True

    def finish(self) -> bool:
        """
        The stream ended without a final answer or an error.
        """
        if self.is_terminal:
            return False
        if self.accumulated_text:
            self.status = TurnStatus.COMPLETE
        else:
            self.error_message = NO_RESPONSE_MESSAGE
            self.status = TurnStatus.FAILED
        return True

    def fail(self, message: str) -> bool:
        if self.is_terminal:
            return False
        self.error_message = message
        self.status = TurnStatus.FAILED
        return True
