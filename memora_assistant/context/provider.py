"""
Context Provider.

Reads the host's AssistantContext snapshot: which module the user is on,
a one-line human summary, and whether the user may invoke a given action.
The permission system itself is external; RolePermissionPolicy is the
default role-table implementation.
"""
import logging
import re
from abc import ABC, abstractmethod
from typing import Dict, FrozenSet, NamedTuple, Optional

from ..schemas.context import AssistantContext
from ..schemas.intent import IntentAction

logger = logging.getLogger(__name__)


class ModuleInfo(NamedTuple):
    module: str
    label: str


# Checked in order; the bare hub route comes last so sub-pages win
PAGE_CONTEXT_MAP: Dict[str, ModuleInfo] = {
    "/projects": ModuleInfo("project", "Projets"),
    "/tasks": ModuleInfo("task", "Taches"),
    "/meetings": ModuleInfo("meeting", "Reunions"),
    "/absences": ModuleInfo("absence", "Absences"),
    "/personnel": ModuleInfo("personnel", "Personnel"),
    "/recruitment": ModuleInfo("recruitment", "Recrutement"),
    "/training": ModuleInfo("training", "Formations"),
    "/momentum": ModuleInfo("momentum", "Momentum"),
    "/profile": ModuleInfo("profile", "Profil"),
    "/settings": ModuleInfo("settings", "Parametres"),
    "/users": ModuleInfo("users", "Utilisateurs"),
    "/groups": ModuleInfo("groups", "Groupes"),
    "/stats": ModuleInfo("stats", "Statistiques"),
    "/admin": ModuleInfo("admin", "Administration"),
    "/hub": ModuleInfo("dashboard", "Tableau de bord"),
}

_HUB_GROUP_RE = re.compile(r"/hub/[^/]+")


def detect_current_module(path: Optional[str]) -> Optional[ModuleInfo]:
    if not path:
        return None
    normalized = _HUB_GROUP_RE.sub("/hub", path, count=1)
    for pattern, info in PAGE_CONTEXT_MAP.items():
        if pattern in normalized:
            return info
    return None


def build_context_summary(context: AssistantContext) -> str:
    """e.g. 'Page actuelle : Projets | Groupe : Alpha | Role : Manager'"""
    parts = []

    module = detect_current_module(context.current_page)
    if module:
        parts.append(f"Page actuelle : {module.label}")
    if context.current_group_name:
        parts.append(f"Groupe : {context.current_group_name}")
    if context.current_user_name:
        parts.append(f"Utilisateur : {context.current_user_name}")
    if context.current_user_role:
        parts.append(f"Role : {context.current_user_role}")
    if context.admin_mode:
        parts.append("Mode admin actif")
    if context.active_project_name:
        parts.append(f"Projet actif : {context.active_project_name}")

    return " | ".join(parts)


class PermissionPolicy(ABC):
    @abstractmethod
    def has_permission_for_action(self, context: AssistantContext, action: str) -> bool:
        """
        Whether the user described by `context` may invoke `action`
        (an IntentAction value).
        """
        pass


MANAGER_RESTRICTED: FrozenSet[str] = frozenset({
    IntentAction.LIST_USERS.value,
    IntentAction.TOGGLE_ADMIN_MODE.value,
})

COLLABORATOR_ALLOWED: FrozenSet[str] = frozenset({
    IntentAction.NAVIGATE_TO.value,
    IntentAction.CREATE_TASK.value,
    IntentAction.LIST_TASKS.value,
    IntentAction.COMPLETE_TASK.value,
    IntentAction.LIST_PROJECTS.value,
    IntentAction.LIST_MEETINGS.value,
    IntentAction.REQUEST_ABSENCE.value,
    IntentAction.LIST_ABSENCES.value,
    IntentAction.SEARCH_GLOBAL.value,
    IntentAction.LIST_NOTIFICATIONS.value,
    IntentAction.MARK_NOTIFICATIONS_READ.value,
    IntentAction.CHANGE_THEME.value,
    IntentAction.SHOW_HELP.value,
    IntentAction.GREET.value,
    IntentAction.SHOW_STATS.value,
})

GUEST_ALLOWED: FrozenSet[str] = frozenset({
    IntentAction.NAVIGATE_TO.value,
    IntentAction.SEARCH_GLOBAL.value,
    IntentAction.LIST_NOTIFICATIONS.value,
    IntentAction.CHANGE_THEME.value,
    IntentAction.SHOW_HELP.value,
    IntentAction.GREET.value,
})


class RolePermissionPolicy(PermissionPolicy):
    """
    Explicit `context.permissions` wins; otherwise the role decides.
    Owner and Admin may do everything, Manager everything except user
    listing and the admin toggle, Collaborator and Guest only their
    allowlists. A context without a role may do nothing.
    """

    def has_permission_for_action(self, context: AssistantContext, action: str) -> bool:
        action = getattr(action, "value", action)

        if context.permissions is not None:
            return action in context.permissions

        role = context.current_user_role
        if not role:
            return False
        if role in ("Owner", "Admin"):
            return True
        if role == "Manager":
            return action not in MANAGER_RESTRICTED
        if role == "Collaborator":
            return action in COLLABORATOR_ALLOWED
        if role == "Guest":
            return action in GUEST_ALLOWED

        logger.debug(f"Unknown role '{role}', denying '{action}'")
        return False


class AllowAllPolicy(PermissionPolicy):
    """Grants everything. Useful for hosts that check permissions elsewhere."""

    def has_permission_for_action(self, context: AssistantContext, action: str) -> bool:
        return True
