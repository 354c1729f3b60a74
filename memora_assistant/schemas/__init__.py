"""
Schemas - Structured Models Exchanged Between Components

Defines the Pydantic models passed between the detector, the executor, the
suggestion engine and the host: intents, context snapshots, attachments,
action results and the response envelope.

`schemas.results` depends on the state layer and is imported from its own
module path.
"""

from memora_assistant.schemas.context import AssistantContext
from memora_assistant.schemas.intent import DetectedIntent, IntentAction, IntentCategory

__all__ = [
    "AssistantContext",
    "DetectedIntent",
    "IntentAction",
    "IntentCategory",
]
