"""
Suggestion Engine - Clickable Shortcuts for Every Turn

Produces suggestions from four sources:
- step chips for the active flow step (options, date shortcuts, yes/no, skip)
- contextual suggestions for the module the user is on
- follow-ups after an immediate action, a completed flow or an unknown intent
- autocomplete over the catalogue (or the commands, for `/` input)

Permission filtering happens here and only here: every list except step
chips goes through `filter_allowed`, which derives each suggestion's action
from its query (command registry for `/` queries, IntentDetector otherwise).
"""

import logging
from datetime import date, timedelta
from typing import Iterable, List, Optional

from ..context.provider import PermissionPolicy, detect_current_module
from ..data.suggestions import (
    CONTEXTUAL_SUGGESTIONS,
    FLOW_COMPLETION_SUGGESTIONS,
    FOLLOW_UP_SUGGESTIONS,
    HELP_SUGGESTION,
    SUGGESTION_GROUPS,
    WELCOME_SUGGESTIONS,
)
from ..domain.models import FlowStep
from ..intent.commands import CommandRegistry, is_smart_command
from ..intent.detector import IntentDetector, normalize_input
from ..schemas.context import AssistantContext
from ..schemas.intent import IntentAction, IntentCategory
from ..schemas.results import Suggestion
from ..state.models import ActiveFlow

logger = logging.getLogger(__name__)

MAX_AUTOCOMPLETE = 6
MAX_WELCOME = 6
MAX_CONTEXTUAL_IN_WELCOME = 4

FLOW_CATEGORIES = {
    "create_task": IntentCategory.TASK,
    "create_project": IntentCategory.PROJECT,
    "create_meeting": IntentCategory.MEETING,
    "request_absence": IntentCategory.ABSENCE,
    "create_job_offer": IntentCategory.RECRUITMENT,
    "create_training": IntentCategory.TRAINING,
}


def contextual_suggestions(context: AssistantContext) -> List[Suggestion]:
    """Unfiltered suggestions for the module of `context.current_page`."""
    module = detect_current_module(context.current_page)
    if module is None or module.module not in CONTEXTUAL_SUGGESTIONS:
        return list(WELCOME_SUGGESTIONS)
    return list(CONTEXTUAL_SUGGESTIONS[module.module])


def dedupe(suggestions: Iterable[Suggestion]) -> List[Suggestion]:
    """First occurrence wins, by id and by query."""
    seen_ids, seen_queries = set(), set()
    unique = []
    for s in suggestions:
        query_key = normalize_input(s.query)
        if s.id in seen_ids or query_key in seen_queries:
            continue
        seen_ids.add(s.id)
        seen_queries.add(query_key)
        unique.append(s)
    return unique


class SuggestionEngine:
    def __init__(
        self,
        policy: PermissionPolicy,
        detector: Optional[IntentDetector] = None,
        commands: Optional[CommandRegistry] = None,
    ):
        self.policy = policy
        self.detector = detector or IntentDetector()
        self.commands = commands or CommandRegistry()

    # ==========================================================================
    # Step chips (not permission filtered: they answer the current question)
    # ==========================================================================

    def step_suggestions(self, flow: ActiveFlow, today: Optional[date] = None) -> List[Suggestion]:
        step = flow.current_step
        if step is None:
            return []
        category = FLOW_CATEGORIES.get(flow.action, IntentCategory.HELP)
        return self._chips_for_step(step, category, today or date.today())

    def _chips_for_step(self, step: FlowStep, category: IntentCategory, today: date) -> List[Suggestion]:
        chips: List[Suggestion] = []

        if step.type == "select":
            chips.extend(
                Suggestion(id=f"step-{step.id}-{opt.value}", label=opt.label, icon="check",
                           query=opt.label, category=category)
                for opt in step.options
            )

        elif step.type == "date":
            shortcuts = [
                ("today", "Aujourd'hui", today),
                ("tomorrow", "Demain", today + timedelta(days=1)),
                ("next-week", "Semaine prochaine", today + timedelta(days=7)),
            ]
            chips.extend(
                Suggestion(id=f"step-{step.id}-{key}", label=label, icon="calendar",
                           query=day.isoformat(), category=category)
                for key, label, day in shortcuts
            )

        elif step.type == "confirm":
            chips.append(Suggestion(id=f"step-{step.id}-yes", label="Oui, confirmer",
                                    icon="check", query="oui", category=category))
            chips.append(Suggestion(id=f"step-{step.id}-no", label="Non, annuler",
                                    icon="close", query="non", category=category))

        if not step.required and step.type != "confirm":
            chips.append(Suggestion(id=f"step-{step.id}-skip", label="Passer", icon="skip",
                                    query="", category=category))

        return chips

    # ==========================================================================
    # Contextual & follow-ups
    # ==========================================================================

    def contextual(self, context: AssistantContext) -> List[Suggestion]:
        return self.filter_allowed(contextual_suggestions(context), context)

    def follow_ups(self, category: str, context: AssistantContext) -> List[Suggestion]:
        """Per-category follow-ups; unknown categories fall back to the context."""
        category = getattr(category, "value", category)
        base = FOLLOW_UP_SUGGESTIONS.get(category)
        if base is None:
            return self.contextual(context)
        return self.filter_allowed([*base, HELP_SUGGESTION], context)

    def flow_completion(self, action: str, context: AssistantContext) -> List[Suggestion]:
        base = FLOW_COMPLETION_SUGGESTIONS.get(action)
        if base is None:
            return self.contextual(context)
        return self.filter_allowed(base, context)

    def welcome(self, context: AssistantContext) -> List[Suggestion]:
        """A few contextual suggestions first, completed by general ones."""
        mixed = dedupe([
            *contextual_suggestions(context)[:MAX_CONTEXTUAL_IN_WELCOME],
            *WELCOME_SUGGESTIONS,
        ])
        return self.filter_allowed(mixed, context)[:MAX_WELCOME]

    # ==========================================================================
    # Autocomplete
    # ==========================================================================

    def autocomplete(self, partial: str, context: AssistantContext) -> List[Suggestion]:
        if is_smart_command(partial):
            return self.filter_allowed(self.commands.autocomplete(partial), context)[:MAX_AUTOCOMPLETE]

        needle = normalize_input(partial)
        if len(needle) < 2:
            return []

        matches = [
            s for s in self._catalogue()
            if needle in normalize_input(s.label)
            or needle in normalize_input(s.query)
            or (s.description and needle in normalize_input(s.description))
        ]
        return self.filter_allowed(dedupe(matches), context)[:MAX_AUTOCOMPLETE]

    @staticmethod
    def _catalogue() -> List[Suggestion]:
        catalogue: List[Suggestion] = list(WELCOME_SUGGESTIONS)
        for group in SUGGESTION_GROUPS.values():
            catalogue.extend(group)
        for group in CONTEXTUAL_SUGGESTIONS.values():
            catalogue.extend(group)
        return catalogue

    # ==========================================================================
    # Permission filter
    # ==========================================================================

    def filter_allowed(self, suggestions: Iterable[Suggestion], context: AssistantContext) -> List[Suggestion]:
        allowed = []
        for s in suggestions:
            action = self.action_for(s)
            if action is None or self.policy.has_permission_for_action(context, action):
                allowed.append(s)
            else:
                logger.debug(f"Suggestion '{s.id}' hidden: '{action}' not permitted")
        return allowed

    def action_for(self, suggestion: Suggestion) -> Optional[str]:
        """
        The action a suggestion would trigger when submitted, or None when it
        triggers nothing permission-relevant (system command, unknown text).
        """
        if is_smart_command(suggestion.query):
            command = self.commands.resolve(suggestion.query)
            if command is None or command.action is None:
                return None
            return command.action.value

        intent = self.detector.detect(suggestion.query)
        if intent.action == IntentAction.UNKNOWN:
            return None
        return intent.action.value
