"""
Execution Layer - Flow State Machine and Action Execution

Defines the FlowEngine (deterministic slot-filling state machine) and the
ActionExecutor (domain operation dispatch) that together resolve a turn.
"""

from memora_assistant.execution.engine import FlowEngine, FlowTurn, StateMachineTransition
from memora_assistant.execution.executor import ActionExecutor


__all__ = [
    "ActionExecutor",
    "FlowEngine",
    "FlowTurn",
    "StateMachineTransition",
]
