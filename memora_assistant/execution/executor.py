"""
Executor - Action Execution Layer

The ActionExecutor turns a resolved intent, or a completed flow's collected
data, into a domain operation call and an ActionResult. It is stateless and
does not check permissions (the MessageProcessor does, before calling it).

Domain failures never raise out of the executor: an OperationOutcome with
`success=False` or a DomainOperationError becomes a `success=False` result.
There is no retry.
"""

import logging
import zlib
from typing import Awaitable, Callable, Dict, List, Optional, Sequence

from ..data.responses import (
    DOMAIN_FAILURE,
    GREETING_RESPONSES,
    HELP_SECTIONS,
    UNKNOWN_INTENT,
    UNSUPPORTED_ACTION,
)
from ..data.suggestions import ACTION_FOLLOW_UPS, FLOW_COMPLETION_SUGGESTIONS, WELCOME_SUGGESTIONS
from ..domain.models import FlowStep
from ..schemas.attachments import (
    CardAttachment,
    CardField,
    ListAttachment,
    NavigationAttachment,
    StatsAttachment,
)
from ..schemas.context import AssistantContext
from ..schemas.intent import DetectedIntent, IntentAction
from ..schemas.results import ActionResult, Suggestion
from ..services.exceptions import DomainOperationError
from ..services.operations import DomainOperations, OperationOutcome
from ..state.models import ActiveFlow
from ..suggestions.engine import contextual_suggestions
from .engine import strip_confirmation
from .navigation import available_links, resolve_navigation_target
from .prompts import Template, render
from .prompts.flow_messages import build_completion_message

logger = logging.getLogger(__name__)

Handler = Callable[[DetectedIntent, AssistantContext], Awaitable[ActionResult]]

# (title, empty text, message) for the list attachments
LIST_VIEWS = {
    IntentAction.LIST_TASKS: ("Taches", "Aucune tache trouvee.", "Voici vos taches"),
    IntentAction.LIST_PROJECTS: ("Projets", "Aucun projet.", "Voici la liste des projets"),
    IntentAction.LIST_MEETINGS: ("Reunions a venir", "Aucune reunion planifiee.", "Voici vos prochaines reunions"),
    IntentAction.LIST_ABSENCES: ("Absences", "Aucune demande d'absence.", "Voici vos demandes d'absence"),
    IntentAction.LIST_NOTIFICATIONS: ("Notifications", "Aucune notification.", "Voici vos notifications recentes"),
    IntentAction.LIST_USERS: ("Equipe", "Aucun utilisateur trouve.", "Voici les membres de l'equipe"),
    IntentAction.FIND_USER: ("Equipe", "Aucun utilisateur trouve.", "Voici les membres correspondants"),
    IntentAction.LIST_CANDIDATES: ("Candidats", "Aucun candidat.", "Voici les candidats en cours de recrutement"),
    IntentAction.LIST_TRAININGS: ("Formations", "Aucune formation.", "Voici les formations disponibles"),
}

THEME_LABELS = {"dark": "sombre", "light": "clair", "system": "systeme"}

CREATED_CARD_TITLES = {
    "create_task": "Nouvelle tache",
    "create_project": "Nouveau projet",
    "create_meeting": "Reunion planifiee",
    "request_absence": "Demande d'absence",
    "create_job_offer": "Offre d'emploi",
    "create_training": "Nouvelle formation",
}

# Actions recognised by the detector that the assistant cannot perform itself
UNSUPPORTED_ACTIONS = frozenset({
    IntentAction.UPDATE_TASK,
    IntentAction.DELETE_TASK,
    IntentAction.ASSIGN_TASK,
    IntentAction.UPDATE_PROJECT,
    IntentAction.DELETE_PROJECT,
})


class ActionExecutor:
    def __init__(self, operations: DomainOperations):
        self.operations = operations
        self._handlers: Dict[IntentAction, Handler] = {
            IntentAction.GREET: self._greet,
            IntentAction.SHOW_HELP: self._show_help,
            IntentAction.NAVIGATE_TO: self._navigate,
            IntentAction.SEARCH_GLOBAL: self._search,
            IntentAction.CHANGE_THEME: self._change_theme,
            IntentAction.TOGGLE_ADMIN_MODE: self._toggle_admin_mode,
            IntentAction.EXPORT_DATA: self._export,
            IntentAction.COMPLETE_TASK: self._complete_task,
            IntentAction.CANCEL_MEETING: self._cancel_meeting,
            IntentAction.APPROVE_ABSENCE: self._approve_absence,
            IntentAction.REJECT_ABSENCE: self._reject_absence,
            IntentAction.MARK_NOTIFICATIONS_READ: self._mark_notifications_read,
            IntentAction.SHOW_STATS: self._show_stats,
        }
        for action in LIST_VIEWS:
            self._handlers[action] = self._list
        self._create_operations = {
            IntentAction.CREATE_TASK.value: operations.create_task,
            IntentAction.CREATE_PROJECT.value: operations.create_project,
            IntentAction.CREATE_MEETING.value: operations.create_meeting,
            IntentAction.REQUEST_ABSENCE.value: operations.request_absence,
            IntentAction.CREATE_JOB_OFFER.value: operations.create_job_offer,
            IntentAction.CREATE_TRAINING.value: operations.create_training,
        }

    # ==========================================================================
    # Entry points
    # ==========================================================================

    async def execute_intent(self, intent: DetectedIntent, context: AssistantContext) -> ActionResult:
        """Runs an action that needs no further input."""
        handler = self._handlers.get(intent.action)
        if handler is not None:
            return await handler(intent, context)

        if intent.action in UNSUPPORTED_ACTIONS:
            return ActionResult(
                success=False,
                message=UNSUPPORTED_ACTION,
                follow_up_suggestions=contextual_suggestions(context),
            )

        return ActionResult(
            success=False,
            message=UNKNOWN_INTENT,
            follow_up_suggestions=contextual_suggestions(context),
        )

    async def execute_flow(self, flow: ActiveFlow, context: AssistantContext) -> ActionResult:
        """Runs the action of a completed flow with its collected data."""
        return await self.execute_operation(
            flow.action, strip_confirmation(flow.collected_data), context, flow.steps
        )

    async def execute_operation(
        self,
        action: str,
        data: Dict[str, str],
        context: AssistantContext,
        steps: Sequence[FlowStep] = (),
    ) -> ActionResult:
        """
        Invokes the creation operation for `action`. Also used by smart
        commands that create records without a flow.
        """
        operation = self._create_operations.get(action)
        if operation is None:
            logger.warning(f"No domain operation for action '{action}'")
            return ActionResult(success=False, message=UNSUPPORTED_ACTION)

        outcome = await self._run(action, operation, context, data)
        if not outcome.success:
            return ActionResult(
                success=False,
                message=outcome.message or DOMAIN_FAILURE,
                follow_up_suggestions=contextual_suggestions(context),
            )

        logger.info(f"Action '{action}' executed")
        return ActionResult(
            success=True,
            message=build_completion_message(action, data, list(steps)),
            attachment=self._created_card(action, data, steps),
            data={"created": {"action": action, "record": outcome.record or dict(data)}},
            follow_up_suggestions=(
                FLOW_COMPLETION_SUGGESTIONS.get(action) or contextual_suggestions(context)
            ),
        )

    async def _run(self, action: str, operation, context: AssistantContext, params: Dict[str, str]) -> OperationOutcome:
        try:
            return await operation(context, params)
        except DomainOperationError as e:
            logger.error(f"Domain operation '{action}' failed: {e}")
            return OperationOutcome(success=False, message=str(e) or None)

    # ==========================================================================
    # Conversation
    # ==========================================================================

    async def _greet(self, intent, context):
        # Stable pick per text keeps the executor deterministic
        index = zlib.crc32(intent.raw_query.encode("utf-8")) % len(GREETING_RESPONSES)
        return ActionResult(
            success=True,
            message=GREETING_RESPONSES[index],
            follow_up_suggestions=contextual_suggestions(context),
        )

    async def _show_help(self, intent, context):
        return ActionResult(
            success=True,
            message=render(Template.HELP, sections=HELP_SECTIONS),
            follow_up_suggestions=WELCOME_SUGGESTIONS[:4],
        )

    async def _navigate(self, intent, context):
        route = resolve_navigation_target(intent.entities.get("target"), context)
        if route is None:
            # Bare keywords ("statistiques") carry no target entity
            route = resolve_navigation_target(intent.raw_query, context)

        if route is None:
            return ActionResult(
                success=False,
                message="Je n'ai pas trouve cette page. Voici les pages disponibles :",
                attachment=NavigationAttachment(links=available_links(context)),
                follow_up_suggestions=WELCOME_SUGGESTIONS[:4],
            )

        landing = context.model_copy(update={"current_page": route.path})
        return ActionResult(
            success=True,
            message=f"Je vous emmene vers **{route.label}**.",
            navigate_to=route.path,
            follow_up_suggestions=contextual_suggestions(landing),
        )

    # ==========================================================================
    # Read operations
    # ==========================================================================

    async def _list(self, intent, context):
        title, empty_text, message = LIST_VIEWS[intent.action]
        params = dict(intent.entities)

        if intent.action == IntentAction.FIND_USER and "name" not in params and "query" in params:
            params["name"] = params["query"]
        operation = {
            IntentAction.LIST_TASKS: self.operations.list_tasks,
            IntentAction.LIST_PROJECTS: self.operations.list_projects,
            IntentAction.LIST_MEETINGS: self.operations.list_meetings,
            IntentAction.LIST_ABSENCES: self.operations.list_absences,
            IntentAction.LIST_NOTIFICATIONS: self.operations.list_notifications,
            IntentAction.LIST_USERS: self.operations.list_users,
            IntentAction.FIND_USER: self.operations.list_users,
            IntentAction.LIST_CANDIDATES: self.operations.list_candidates,
            IntentAction.LIST_TRAININGS: self.operations.list_trainings,
        }[intent.action]

        outcome = await self._run(intent.action.value, operation, context, params)
        if not outcome.success:
            return self._failure(outcome, context)

        if intent.action == IntentAction.LIST_TASKS and params.get("status"):
            title = f"{title} ({params['status']})"
            message = f"{message} ({params['status']})"

        return ActionResult(
            success=True,
            message=f"{message} :",
            attachment=ListAttachment(title=title, items=outcome.items, empty_text=empty_text),
            follow_up_suggestions=self._follow_ups(intent.action, context),
        )

    async def _search(self, intent, context):
        query = intent.entities.get("query") or intent.raw_query
        outcome = await self._run("search_global", self.operations.search, context, {"query": query})
        if not outcome.success:
            return self._failure(outcome, context)
        return ActionResult(
            success=True,
            message=f"Resultats de recherche pour **\"{query}\"** :",
            attachment=ListAttachment(
                title=f"Recherche : {query}", items=outcome.items, empty_text="Aucun resultat."
            ),
            follow_up_suggestions=contextual_suggestions(context),
        )

    async def _show_stats(self, intent, context):
        outcome = await self._run("show_stats", self.operations.get_stats, context, {})
        if not outcome.success:
            return self._failure(outcome, context)
        return ActionResult(
            success=True,
            message="Voici un apercu de vos indicateurs :",
            attachment=StatsAttachment(title="Indicateurs cles", stats=outcome.stats),
            follow_up_suggestions=self._follow_ups(intent.action, context),
        )

    # ==========================================================================
    # Settings
    # ==========================================================================

    async def _change_theme(self, intent, context):
        theme = intent.entities.get("theme") or "dark"
        return ActionResult(
            success=True,
            message=f"Le theme a ete change en mode **{THEME_LABELS.get(theme, theme)}**.",
            data={"theme": theme},
            follow_up_suggestions=contextual_suggestions(context),
        )

    async def _toggle_admin_mode(self, intent, context):
        enabled = not context.admin_mode
        return ActionResult(
            success=True,
            message="Le **mode admin** a ete active." if enabled else "Le **mode admin** a ete desactive.",
            data={"admin_mode": enabled},
            follow_up_suggestions=contextual_suggestions(context),
        )

    async def _export(self, intent, context):
        fmt = intent.entities.get("format") or "pdf"
        outcome = await self._run("export_data", self.operations.export_data, context, {"format": fmt})
        if not outcome.success:
            return self._failure(outcome, context)
        return ActionResult(
            success=True,
            message=(
                f"L'export en **{fmt.upper()}** est en cours de preparation. "
                "Vous recevrez une notification quand il sera pret."
            ),
            data={"export": outcome.record} if outcome.record else None,
            follow_up_suggestions=contextual_suggestions(context),
        )

    # ==========================================================================
    # Updates
    # ==========================================================================

    async def _complete_task(self, intent, context):
        name = intent.entities.get("name")
        if not name:
            return self._missing_name(
                "Quelle tache voulez-vous terminer ? Donnez son titre entre guillemets, "
                "par exemple : Terminer la tache \"Rapport mensuel\".",
                context,
            )
        outcome = await self._run("complete_task", self.operations.complete_task, context, {"name": name})
        if not outcome.success:
            return self._failure(outcome, context)
        return ActionResult(
            success=True,
            message=f"La tache **\"{name}\"** a ete marquee comme terminee.",
            data={"updated": outcome.record} if outcome.record else None,
            follow_up_suggestions=self._follow_ups(intent.action, context),
        )

    async def _cancel_meeting(self, intent, context):
        name = intent.entities.get("name")
        if not name:
            return self._missing_name(
                "Quelle reunion voulez-vous annuler ? Donnez son titre entre guillemets.",
                context,
            )
        outcome = await self._run("cancel_meeting", self.operations.cancel_meeting, context, {"name": name})
        if not outcome.success:
            return self._failure(outcome, context)
        return ActionResult(
            success=True,
            message=f"La reunion **\"{name}\"** a ete annulee. Les participants ont ete notifies.",
            data={"updated": outcome.record} if outcome.record else None,
            follow_up_suggestions=self._follow_ups(intent.action, context),
        )

    async def _approve_absence(self, intent, context):
        return await self._decide_absence(intent, context, self.operations.approve_absence, "approuvee")

    async def _reject_absence(self, intent, context):
        return await self._decide_absence(intent, context, self.operations.reject_absence, "refusee")

    async def _decide_absence(self, intent, context, operation, verdict: str):
        outcome = await self._run(intent.action.value, operation, context, dict(intent.entities))
        if not outcome.success:
            return self._failure(outcome, context)
        return ActionResult(
            success=True,
            message=f"La demande d'absence a ete **{verdict}**. Le collaborateur a ete notifie.",
            data={"updated": outcome.record} if outcome.record else None,
            follow_up_suggestions=self._follow_ups(intent.action, context),
        )

    async def _mark_notifications_read(self, intent, context):
        outcome = await self._run(
            "mark_notifications_read", self.operations.mark_notifications_read, context, {}
        )
        if not outcome.success:
            return self._failure(outcome, context)
        return ActionResult(
            success=True,
            message="Toutes vos notifications ont ete marquees comme lues.",
            follow_up_suggestions=contextual_suggestions(context),
        )

    # ==========================================================================
    # Helpers
    # ==========================================================================

    @staticmethod
    def _created_card(action: str, data: Dict[str, str], steps: Sequence[FlowStep]) -> Optional[CardAttachment]:
        fields = [
            CardField(label=step.short_label, value=step.option_label(data[step.field]))
            for step in steps
            if data.get(step.field)
        ]
        if not fields:
            return None
        return CardAttachment(title=CREATED_CARD_TITLES.get(action, "Element cree"), fields=fields)

    @staticmethod
    def _follow_ups(action: IntentAction, context: AssistantContext) -> List[Suggestion]:
        return ACTION_FOLLOW_UPS.get(action.value) or contextual_suggestions(context)

    @staticmethod
    def _failure(outcome: OperationOutcome, context: AssistantContext) -> ActionResult:
        return ActionResult(
            success=False,
            message=outcome.message or DOMAIN_FAILURE,
            follow_up_suggestions=contextual_suggestions(context),
        )

    @staticmethod
    def _missing_name(message: str, context: AssistantContext) -> ActionResult:
        return ActionResult(
            success=False,
            message=message,
            follow_up_suggestions=contextual_suggestions(context),
        )
