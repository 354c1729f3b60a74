"""
Repositories - Access to Flow Definitions and Sessions
"""

from memora_assistant.repositories.flow import FlowRepository, StaticFlowRepository
from memora_assistant.repositories.session import (
    InMemorySessionRepository,
    SessionRepository,
)

__all__ = [
    "FlowRepository",
    "InMemorySessionRepository",
    "SessionRepository",
    "StaticFlowRepository",
]
