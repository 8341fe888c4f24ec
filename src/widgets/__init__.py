"""
Custom UI widgets for the streaming chat client.
"""
from .input_area import InputArea
from .chat_log import ChatLog, TurnView

__all__ = ["InputArea", "ChatLog", "TurnView"]
