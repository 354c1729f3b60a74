"""
Message Processor - One Conversation Turn

The MessageProcessor is the pure entry point of the assistant:
(text, context, flow) -> AssistantResponse. It holds no per-session state;
the caller keeps the returned `flow` and passes it back on the next turn.

Routing, in order:
1. An active flow receives the text as the answer to its current step.
2. Slash-prefixed text runs a smart command.
3. Otherwise the IntentDetector classifies the text, and the intent either
   starts a guided flow or is executed immediately.

Permissions are checked here for commands, flow starts and immediate
actions; unknown intents are exempt. No exception crosses this boundary:
an unexpected error becomes an `is_error` message.
"""

import asyncio
import logging
from typing import List, Optional

from ..config import settings
from ..context.provider import PermissionPolicy, build_context_summary
from ..data.responses import PERMISSION_DENIED, UNEXPECTED_ERROR
from ..data.suggestions import WELCOME_SUGGESTIONS
from ..execution.engine import FlowEngine, FlowTurn, StateMachineTransition
from ..execution.executor import ActionExecutor
from ..execution.prompts import Template, render
from ..execution.prompts.flow_messages import FLOW_NOT_FOUND
from ..intent.commands import CommandOutcome, CommandRegistry, is_smart_command
from ..intent.detector import IntentDetector, requires_flow
from ..repositories.flow import FlowRepository
from ..schemas.context import AssistantContext
from ..schemas.intent import DetectedIntent, IntentAction
from ..schemas.results import ActionResult, AssistantResponse, ResponseKind, Suggestion
from ..state.models import ActiveFlow, ChatMessage
from ..suggestions.engine import SuggestionEngine
from .exceptions import FlowDefinitionNotFoundError

logger = logging.getLogger(__name__)

FLOW_CANCELLED_BY_HOST = "L'action en cours a ete annulee. Comment puis-je vous aider ?"


class MessageProcessor:
    def __init__(
        self,
        executor: ActionExecutor,
        flow_repository: FlowRepository,
        policy: PermissionPolicy,
        engine: Optional[FlowEngine] = None,
        detector: Optional[IntentDetector] = None,
        commands: Optional[CommandRegistry] = None,
        suggestions: Optional[SuggestionEngine] = None,
        thinking_delay_ms: Optional[int] = None,
    ):
        self.executor = executor
        self.flow_repository = flow_repository
        self.policy = policy
        self.engine = engine or FlowEngine()
        self.detector = detector or IntentDetector()
        self.commands = commands or CommandRegistry()
        self.suggestions = suggestions or SuggestionEngine(policy, self.detector, self.commands)
        self.thinking_delay_ms = (
            settings.THINKING_DELAY_MS if thinking_delay_ms is None else thinking_delay_ms
        )

    async def process_message(
        self, text: str, context: AssistantContext, flow: Optional[ActiveFlow] = None
    ) -> AssistantResponse:
        """
        The Turn:
        1. Active flow -> flow step
        2. Smart command
        3. Intent detection -> flow start or immediate execution
        """
        logger.debug(f"Processing message [{build_context_summary(context)}]")
        try:
            if flow is not None:
                return await self._handle_flow_step(text, context, flow)

            if is_smart_command(text):
                return await self._handle_command(text, context)

            intent = self.detector.detect(text)
            if requires_flow(intent.action.value):
                return await self._start_flow(intent, context)
            return await self._execute_immediate(intent, context)

        except Exception:
            logger.exception("Unexpected error while processing message")
            # The flow is handed back untouched so the user can retry the step
            return AssistantResponse(
                message=self._assistant_message(UNEXPECTED_ERROR, is_error=True),
                suggestions=self.suggestions.contextual(context) if flow is None else [],
                flow=flow,
            )

    def cancel_flow(self, context: AssistantContext) -> AssistantResponse:
        """Host-initiated cancellation (e.g. the user closed the form)."""
        logger.info("Flow cancelled by host")
        return AssistantResponse(
            message=self._assistant_message(FLOW_CANCELLED_BY_HOST),
            suggestions=self.suggestions.contextual(context),
            flow=None,
        )

    def welcome(self, context: AssistantContext) -> AssistantResponse:
        message = render(
            Template.WELCOME,
            assistant_name=settings.ASSISTANT_NAME,
            user_name=context.current_user_name,
        )
        return AssistantResponse(
            message=self._assistant_message(message),
            suggestions=self.suggestions.welcome(context),
        )

    async def simulate_thinking(self):
        """Cosmetic pause before answering. No effect on the outcome."""
        if self.thinking_delay_ms > 0:
            await asyncio.sleep(self.thinking_delay_ms / 1000)

    # ==========================================================================
    # Flows
    # ==========================================================================

    async def _handle_flow_step(
        self, text: str, context: AssistantContext, flow: ActiveFlow
    ) -> AssistantResponse:
        turn = self.engine.handle_step(flow, text)

        if turn.transition == StateMachineTransition.CANCEL:
            return AssistantResponse(
                message=self._assistant_message(turn.message),
                suggestions=self.suggestions.contextual(context),
                flow=None,
            )

        if turn.transition == StateMachineTransition.COMPLETE:
            return await self._complete_flow(turn.flow, context)

        return self._flow_response(turn)

    async def _start_flow(self, intent: DetectedIntent, context: AssistantContext) -> AssistantResponse:
        action = intent.action.value
        if not self._is_allowed(context, action):
            return self._denied(context, action)

        try:
            definition = self._require_flow(action)
        except FlowDefinitionNotFoundError as e:
            logger.warning(str(e))
            return AssistantResponse(
                message=self._assistant_message(FLOW_NOT_FOUND),
                suggestions=self.suggestions.contextual(context),
            )

        turn = self.engine.start_flow(definition, intent.entities)
        if turn.transition == StateMachineTransition.COMPLETE:
            return await self._complete_flow(turn.flow, context)
        return self._flow_response(turn)

    async def _complete_flow(self, flow: ActiveFlow, context: AssistantContext) -> AssistantResponse:
        result = await self.executor.execute_flow(flow, context)
        if result.success:
            suggestions = self.suggestions.flow_completion(flow.action, context)
        else:
            suggestions = self._result_suggestions(result, None, context)
        return self._from_result(result, suggestions)

    def _flow_response(self, turn: FlowTurn) -> AssistantResponse:
        return AssistantResponse(
            message=self._assistant_message(turn.message),
            suggestions=self.suggestions.step_suggestions(turn.flow),
            flow=turn.flow,
        )

    def _require_flow(self, action: str):
        definition = self.flow_repository.get_flow_for_action(action)
        if definition is None:
            raise FlowDefinitionNotFoundError(action)
        return definition

    # ==========================================================================
    # Commands & immediate actions
    # ==========================================================================

    async def _handle_command(self, text: str, context: AssistantContext) -> AssistantResponse:
        command = self.commands.resolve(text)
        if command is not None and command.action is not None:
            if not self._is_allowed(context, command.action.value):
                return self._denied(context, command.action.value)

        result = self.commands.execute(text, context)

        if result.kind == CommandOutcome.CLEAR_CONVERSATION:
            logger.info("Conversation clear requested")
            return AssistantResponse(
                kind=ResponseKind.CLEAR_CONVERSATION,
                message=self._assistant_message(result.message),
                suggestions=self.suggestions.contextual(context),
                side_effects={"clear_conversation": True, **result.side_effects},
            )

        if result.delegate is not None:
            return await self._run_delegate(result.delegate, context)

        return AssistantResponse(
            message=self._assistant_message(result.message, attachment=result.attachment),
            suggestions=self.suggestions.filter_allowed(result.suggestions, context),
            navigate_to=result.navigate_to,
            side_effects=dict(result.side_effects),
        )

    async def _run_delegate(self, intent: DetectedIntent, context: AssistantContext) -> AssistantResponse:
        action = intent.action.value
        if requires_flow(action):
            # Quick creation: the command already carries every field
            definition = self.flow_repository.get_flow_for_action(action)
            steps = definition.steps if definition else []
            result = await self.executor.execute_operation(action, dict(intent.entities), context, steps)
            if result.success:
                return self._from_result(result, self.suggestions.flow_completion(action, context))
            return self._from_result(result, self._result_suggestions(result, intent, context))

        result = await self.executor.execute_intent(intent, context)
        return self._from_result(result, self._result_suggestions(result, intent, context))

    async def _execute_immediate(self, intent: DetectedIntent, context: AssistantContext) -> AssistantResponse:
        action = intent.action.value
        if intent.action != IntentAction.UNKNOWN and not self._is_allowed(context, action):
            return self._denied(context, action)

        result = await self.executor.execute_intent(intent, context)
        return self._from_result(result, self._result_suggestions(result, intent, context))

    # ==========================================================================
    # Helpers
    # ==========================================================================

    def _is_allowed(self, context: AssistantContext, action: str) -> bool:
        return self.policy.has_permission_for_action(context, action)

    def _denied(self, context: AssistantContext, action: str) -> AssistantResponse:
        logger.warning(f"Permission denied for action '{action}' (role={context.current_user_role})")
        return AssistantResponse(
            message=self._assistant_message(PERMISSION_DENIED),
            suggestions=self.suggestions.filter_allowed(WELCOME_SUGGESTIONS[:4], context),
        )

    def _result_suggestions(
        self, result: ActionResult, intent: Optional[DetectedIntent], context: AssistantContext
    ) -> List[Suggestion]:
        if result.follow_up_suggestions:
            return self.suggestions.filter_allowed(result.follow_up_suggestions, context)
        if intent is not None:
            return self.suggestions.follow_ups(intent.category, context)
        return self.suggestions.contextual(context)

    def _from_result(self, result: ActionResult, suggestions: List[Suggestion]) -> AssistantResponse:
        return AssistantResponse(
            message=self._assistant_message(result.message, attachment=result.attachment),
            suggestions=suggestions,
            flow=None,
            navigate_to=result.navigate_to,
            side_effects=dict(result.data or {}),
        )

    @staticmethod
    def _assistant_message(content: str, attachment=None, is_error: bool = False) -> ChatMessage:
        return ChatMessage(role="assistant", content=content, attachment=attachment, is_error=is_error)
