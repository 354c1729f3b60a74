"""
Engine - Guided Flow State Machine

The FlowEngine drives one ActiveFlow through its steps, one user turn at a
time. It is a pure function of (flow, input): it never stores state and
never mutates the flow it is given. Every turn returns a FlowTurn carrying
either an updated copy of the flow or None.

States of a flow:
- collecting: the pointer is on a non-confirm step
- confirming: the pointer is on the confirm step
- completed: the pointer is past the last step, the action is ready to run
- cancelled: the user declined at the confirm step

Per turn, on the step at `current_step_index`:
1. Confirm step + cancellation word -> CANCEL
2. Confirm step + affirmation word -> COMPLETE
3. Confirm step, neither -> HOLD on the same question
4. Select step: 1-based index, label or value (any case) -> canonical value;
   no match on a required step -> HOLD listing the options
5. Validation function on the trimmed non-empty input -> HOLD on error
6. Empty input on a required step -> HOLD
7. Empty input on an optional step -> store "" and ADVANCE
8. Otherwise store the trimmed input and ADVANCE
"""

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, Iterable, List, Optional, Tuple

from ..config import settings
from ..domain.models import CONFIRM_FIELD, FlowDefinition, FlowOption, FlowStep
from ..intent.detector import normalize_input
from ..state.models import ActiveFlow
from .prompts import flow_messages

logger = logging.getLogger(__name__)


class StateMachineTransition(Enum):
    """
    What happened to the flow pointer during a turn.
    """

    START = auto()  # A new flow was created (possibly past a pre-filled prefix)
    HOLD = auto()  # Pointer remains on the current step
    ADVANCE = auto()  # Pointer moved to the next step
    COMPLETE = auto()  # Pointer moved past the last step; execute the action
    CANCEL = auto()  # Flow abandoned at the confirm step


@dataclass
class FlowTurn:
    """
    Outcome of one engine turn.

    `flow` is the flow to keep for the next turn. On COMPLETE it is the
    ready-to-execute flow (to hand to the executor, not to keep); on CANCEL
    it is None. `message` is empty on COMPLETE, the executor supplies it.
    """

    transition: StateMachineTransition
    flow: Optional[ActiveFlow]
    message: str = ""


class FlowEngine:
    def __init__(
        self,
        confirm_words: Optional[Iterable[str]] = None,
        cancel_words: Optional[Iterable[str]] = None,
    ):
        self.confirm_words = self._normalize_words(
            confirm_words if confirm_words is not None else settings.CONFIRM_WORDS
        )
        self.cancel_words = self._normalize_words(
            cancel_words if cancel_words is not None else settings.CANCEL_WORDS
        )

    # ==========================================================================
    # Flow start
    # ==========================================================================

    def start_flow(
        self, definition: FlowDefinition, entities: Optional[Dict[str, str]] = None
    ) -> FlowTurn:
        """
        Creates an ActiveFlow for `definition`.

        Entities pre-fill the longest prefix of steps they satisfy. The first
        step without a usable entity stops pre-filling; entities for later
        steps are discarded.
        """
        index, data = self._prefill(definition.steps, entities or {})
        flow = ActiveFlow(
            action=definition.action,
            steps=list(definition.steps),
            current_step_index=index,
            collected_data=data,
        )
        logger.info(
            f"Starting flow '{definition.id}' at step {index}/{len(definition.steps)}"
        )

        if flow.is_ready:
            # Every step pre-filled and nothing to confirm
            return FlowTurn(StateMachineTransition.COMPLETE, flow)

        return FlowTurn(
            StateMachineTransition.START,
            flow,
            flow_messages.build_start_message(definition, flow),
        )

    def _prefill(
        self, steps: List[FlowStep], entities: Dict[str, str]
    ) -> Tuple[int, Dict[str, str]]:
        data: Dict[str, str] = {}
        index = 0
        for step in steps:
            if step.type == "confirm":
                break
            candidate = (entities.get(step.entity_key) or "").strip()
            if not candidate:
                break
            value = self._accept_prefill(step, candidate)
            if value is None:
                logger.debug(f"Entity '{step.entity_key}' rejected for step '{step.id}'")
                break
            data[step.field] = value
            index += 1
        return index, data

    def _accept_prefill(self, step: FlowStep, candidate: str) -> Optional[str]:
        if step.type == "select":
            option = self._match_option(step, candidate)
            if option is None:
                return None
            candidate = option.value
        if step.validation and step.validation(candidate):
            return None
        return candidate

    # ==========================================================================
    # Turn handling
    # ==========================================================================

    def handle_step(self, flow: ActiveFlow, user_input: str) -> FlowTurn:
        step = flow.current_step
        if step is None:
            # Already past the last step; nothing left to collect
            return FlowTurn(StateMachineTransition.COMPLETE, flow)

        value = (user_input or "").strip()

        if step.type == "confirm":
            return self._handle_confirm(flow, step, value)

        if step.type == "select" and value:
            option = self._match_option(step, value)
            if option is not None:
                value = option.value
            elif step.required:
                return self._hold(flow, flow_messages.build_invalid_choice(step))

        if not value:
            if step.required:
                return self._hold(flow, flow_messages.build_field_required(step))
            return self._advance(flow, step, "")

        if step.validation:
            error = step.validation(value)
            if error:
                return self._hold(flow, flow_messages.build_validation_error(step, error))

        return self._advance(flow, step, value)

    def _handle_confirm(self, flow: ActiveFlow, step: FlowStep, value: str) -> FlowTurn:
        answer = normalize_input(value)

        # Cancellation wins when both vocabularies match
        if self._contains_any(answer, self.cancel_words):
            logger.info(f"Flow '{flow.action}' cancelled by user")
            return FlowTurn(
                StateMachineTransition.CANCEL, None, flow_messages.FLOW_CANCELLED
            )

        if self._contains_any(answer, self.confirm_words):
            logger.info(f"Flow '{flow.action}' confirmed")
            completed = self._advanced_copy(flow, step, value)
            return FlowTurn(StateMachineTransition.COMPLETE, completed)

        return self._hold(flow, flow_messages.build_confirm_reprompt(step))

    # ==========================================================================
    # State transitions
    # ==========================================================================

    def _hold(self, flow: ActiveFlow, message: str) -> FlowTurn:
        return FlowTurn(StateMachineTransition.HOLD, flow, message)

    def _advance(self, flow: ActiveFlow, step: FlowStep, value: str) -> FlowTurn:
        updated = self._advanced_copy(flow, step, value)
        next_step = updated.current_step

        if next_step is None:
            # No confirm step: completing the last step completes the flow
            return FlowTurn(StateMachineTransition.COMPLETE, updated)

        if next_step.type == "confirm":
            message = flow_messages.build_summary(updated, next_step)
        else:
            message = flow_messages.build_step_prompt(next_step)

        return FlowTurn(StateMachineTransition.ADVANCE, updated, message)

    @staticmethod
    def _advanced_copy(flow: ActiveFlow, step: FlowStep, value: str) -> ActiveFlow:
        return flow.model_copy(
            update={
                "current_step_index": flow.current_step_index + 1,
                "collected_data": {**flow.collected_data, step.field: value},
            }
        )

    # ==========================================================================
    # Helpers
    # ==========================================================================

    @staticmethod
    def _match_option(step: FlowStep, value: str) -> Optional[FlowOption]:
        """1-based index first, then case-insensitive label or value."""
        value = value.strip()
        if value.isdecimal():
            position = int(value)
            if 1 <= position <= len(step.options):
                return step.options[position - 1]
            return None

        lowered = value.lower()
        return next(
            (
                opt
                for opt in step.options
                if opt.label.lower() == lowered or opt.value.lower() == lowered
            ),
            None,
        )

    @staticmethod
    def _contains_any(text: str, words: List[str]) -> bool:
        return any(word in text for word in words)

    @staticmethod
    def _normalize_words(words: Iterable[str]) -> List[str]:
        return [w for w in (normalize_input(word) for word in words) if w]


def strip_confirmation(data: Dict[str, str]) -> Dict[str, str]:
    """Collected data without the confirm step's answer."""
    return {k: v for k, v in data.items() if k != CONFIRM_FIELD}
