"""
Memora Assistant

A deterministic assistant engine: keyword intent detection, slash commands,
guided slot-filling flows and permission-aware suggestions, resolved one
message at a time by the MessageProcessor.
"""

from memora_assistant.domain import (
    FlowDefinition,
    FlowOption,
    FlowStep,
    StepType,
)
from memora_assistant.state import (
    ActiveFlow,
    ChatMessage,
    SessionState,
)
from memora_assistant.schemas import AssistantContext, DetectedIntent, IntentAction, IntentCategory
from memora_assistant.execution import ActionExecutor, FlowEngine
from memora_assistant.services.processor import MessageProcessor

__all__ = [
    # Domain Layer
    "FlowDefinition",
    "FlowOption",
    "FlowStep",
    "StepType",
    # State Layer
    "ActiveFlow",
    "ChatMessage",
    "SessionState",
    # Schemas
    "AssistantContext",
    "DetectedIntent",
    "IntentAction",
    "IntentCategory",
    # Execution Layer
    "ActionExecutor",
    "FlowEngine",
    "MessageProcessor",
]
