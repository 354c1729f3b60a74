"""
State Layer - Runtime Data Models

Defines the runtime state threaded through a conversation: the ActiveFlow,
chat messages and the host-side session slot.
"""

from memora_assistant.state.models import (
    ActiveFlow,
    ChatMessage,
    SessionState,
)

__all__ = [
    "ActiveFlow",
    "ChatMessage",
    "SessionState",
]
