"""
Intent Layer - Resolving User Text

Turns a raw message into either a DetectedIntent (free text, keyword
catalogue) or a smart command result (slash syntax).
"""

from memora_assistant.intent.commands import (
    CommandOutcome,
    CommandRegistry,
    CommandResult,
    SmartCommand,
    is_smart_command,
    parse_smart_command,
)
from memora_assistant.intent.detector import (
    IntentDetector,
    normalize_input,
    requires_flow,
)

__all__ = [
    "CommandOutcome",
    "CommandRegistry",
    "CommandResult",
    "IntentDetector",
    "SmartCommand",
    "is_smart_command",
    "normalize_input",
    "parse_smart_command",
    "requires_flow",
]
