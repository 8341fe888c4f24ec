"""
Data models for the streaming chat client.
"""
from .turn import NO_RESPONSE_MESSAGE, Turn, TurnStatus

__all__ = ["NO_RESPONSE_MESSAGE", "Turn", "TurnStatus"]
