"""
Events decoded from the chat stream and the notifications the orchestrator emits.
"""

from typing import Literal, Optional, TypedDict, Union


class TokenEvent(TypedDict):
    type: Literal['token']
    text: str


class FinalEvent(TypedDict):
    type: Literal['final']
    text: str


class ErrorEvent(TypedDict):
    type: Literal['error']
    message: str


StreamEvent = Union[TokenEvent, FinalEvent, ErrorEvent]


class TurnChanged(TypedDict):
    type: Literal['turn_changed']
    turn_id: int
    question: str
    text: str
    status: str


class ScrollTo(TypedDict):
    type: Literal['scroll_to']
    offset: Optional[float]


Notification = Union[TurnChanged, ScrollTo]
