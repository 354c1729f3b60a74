"""
Suggestions - Permission-Aware Shortcuts
"""

from memora_assistant.suggestions.engine import (
    SuggestionEngine,
    contextual_suggestions,
    dedupe,
)

__all__ = [
    "SuggestionEngine",
    "contextual_suggestions",
    "dedupe",
]
