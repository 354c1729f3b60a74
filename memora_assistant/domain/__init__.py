"""
Domain Layer - Static Flow Definitions

Defines the static structure of guided flows: FlowDefinitions, FlowSteps
and their select options.
"""

from memora_assistant.domain.models import (
    CONFIRM_FIELD,
    FlowDefinition,
    FlowOption,
    FlowStep,
    StepType,
    Validator,
)

__all__ = [
    "CONFIRM_FIELD",
    "FlowDefinition",
    "FlowOption",
    "FlowStep",
    "StepType",
    "Validator",
]
