"""
Smart Commands - Explicit `/command` Syntax

Slash-prefixed messages bypass free-text intent detection and guided flows.
Each command declares the IntentAction it stands for (None for system
commands) so the caller can apply permissions before running it.

Commands never touch domain collaborators themselves. When a command maps
onto an executor action it returns a `delegate` intent and the caller runs
it; everything else is answered directly.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..schemas.attachments import MessageAttachment
from ..schemas.context import AssistantContext
from ..schemas.intent import DetectedIntent, IntentAction, IntentCategory
from ..schemas.results import Suggestion

logger = logging.getLogger(__name__)

COMMAND_PREFIX = "/"
MAX_AUTOCOMPLETE = 6

EXPORT_FORMATS = ["pdf", "csv", "excel", "json"]


class CommandOutcome(str, Enum):
    """
    MESSAGE: Regular reply to display.
    CLEAR_CONVERSATION: The host must wipe the transcript.
    """
    MESSAGE = "message"
    CLEAR_CONVERSATION = "clear_conversation"


@dataclass
class CommandResult:
    message: str
    kind: CommandOutcome = CommandOutcome.MESSAGE
    attachment: Optional[MessageAttachment] = None
    suggestions: List[Suggestion] = field(default_factory=list)
    navigate_to: Optional[str] = None
    side_effects: Dict[str, Any] = field(default_factory=dict)
    # Intent the caller should hand to the ActionExecutor instead of this reply
    delegate: Optional[DetectedIntent] = None


CommandHandler = Callable[[str, AssistantContext], CommandResult]


@dataclass(frozen=True)
class SmartCommand:
    command: str
    aliases: Tuple[str, ...]
    description: str
    category: IntentCategory
    action: Optional[IntentAction]
    handler: CommandHandler

    def matches(self, name: str) -> bool:
        return name == self.command or name in self.aliases


def is_smart_command(text: str) -> bool:
    return text.strip().startswith(COMMAND_PREFIX)


def parse_smart_command(text: str) -> Tuple[str, str]:
    """
    Splits `/name rest of args` into ("name", "rest of args").
    The name is lower-cased; arguments keep their case.
    """
    body = text.strip()[len(COMMAND_PREFIX):]
    name, _, args = body.partition(" ")
    return name.lower(), args.strip()


def _delegate(action: IntentAction, category: IntentCategory, entities: Dict[str, str], raw: str) -> CommandResult:
    return CommandResult(
        message="",
        delegate=DetectedIntent(
            action=action,
            category=category,
            entities=entities,
            confidence=1.0,
            raw_query=raw,
        ),
    )


def _usage(usage: str, example: Optional[str] = None, extra: Optional[str] = None) -> CommandResult:
    message = f"Usage : **{usage}**"
    if example:
        message += f"\n\nExemple : `{example}`"
    if extra:
        message += f"\n\n{extra}"
    return CommandResult(message=message)


# ==============================================================================
# Handlers
# ==============================================================================

def _cmd_help(args: str, context: AssistantContext) -> CommandResult:
    lines = "\n".join(f"- **/{cmd.command}** : {cmd.description}" for cmd in SMART_COMMANDS)
    return CommandResult(
        message=(
            f"Voici les commandes disponibles :\n\n{lines}\n\n"
            "Vous pouvez aussi ecrire en langage naturel !"
        )
    )


def _cmd_task(args: str, context: AssistantContext) -> CommandResult:
    if not args:
        return _usage("/tache [titre]", "/tache Corriger le bug de login")
    return _delegate(
        IntentAction.CREATE_TASK,
        IntentCategory.TASK,
        {"title": args, "priority": "Moyenne", "status": "A faire"},
        f"/tache {args}",
    )


def _cmd_project(args: str, context: AssistantContext) -> CommandResult:
    if not args:
        return _usage("/projet [nom]", "/projet Refonte du dashboard")
    return _delegate(
        IntentAction.CREATE_PROJECT,
        IntentCategory.PROJECT,
        {"name": args, "status": "todo"},
        f"/projet {args}",
    )


def _cmd_meeting(args: str, context: AssistantContext) -> CommandResult:
    if not args:
        return _usage(
            "/reunion [titre]", "/reunion Standup quotidien", "Je vous guiderai pour les details."
        )
    return CommandResult(
        message=f"Pret a planifier la reunion **\"{args}\"**. Cliquez ci-dessous pour renseigner les details.",
        suggestions=[
            Suggestion(
                id="sc-plan-meeting",
                label="Planifier",
                icon="calendar",
                query=f"Planifier une reunion \"{args}\"",
                category=IntentCategory.MEETING,
            ),
        ],
    )


def _cmd_navigate(args: str, context: AssistantContext) -> CommandResult:
    if not args:
        return _usage(
            "/aller [page]",
            extra=(
                "Pages disponibles : accueil, projets, taches, reunions, absences, "
                "profil, parametres, statistiques, admin"
            ),
        )
    return _delegate(
        IntentAction.NAVIGATE_TO, IntentCategory.NAVIGATION, {"target": args}, f"/aller {args}"
    )


def _cmd_search(args: str, context: AssistantContext) -> CommandResult:
    if not args:
        return _usage("/chercher [terme]", "/chercher Sophie Martin")
    return _delegate(
        IntentAction.SEARCH_GLOBAL, IntentCategory.SEARCH, {"query": args}, f"/chercher {args}"
    )


def _cmd_absence(args: str, context: AssistantContext) -> CommandResult:
    return CommandResult(
        message="Je vais vous guider pour poser votre conge. Par quoi commence-t-on ?",
        suggestions=[
            Suggestion(
                id="sc-start-absence",
                label="Poser un conge",
                icon="calendar",
                query="Je veux poser un conge",
                category=IntentCategory.ABSENCE,
            ),
            Suggestion(
                id="sc-my-absences",
                label="Mes absences",
                icon="clock",
                query="Montre-moi mes absences",
                category=IntentCategory.ABSENCE,
            ),
        ],
    )


def _cmd_theme(args: str, context: AssistantContext) -> CommandResult:
    name = args.lower()
    if "sombre" in name or "dark" in name:
        theme = "dark"
    elif "clair" in name or "light" in name:
        theme = "light"
    else:
        return CommandResult(message="Usage : **/theme sombre** ou **/theme clair**")
    return _delegate(
        IntentAction.CHANGE_THEME, IntentCategory.SETTINGS, {"theme": theme}, f"/theme {args}"
    )


def _cmd_stats(args: str, context: AssistantContext) -> CommandResult:
    return _delegate(IntentAction.SHOW_STATS, IntentCategory.NAVIGATION, {}, "/stats")


def _cmd_export(args: str, context: AssistantContext) -> CommandResult:
    fmt = args.lower() or "pdf"
    if fmt not in EXPORT_FORMATS:
        return CommandResult(
            message=f"Format non supporte. Formats disponibles : {', '.join(EXPORT_FORMATS)}"
        )
    return _delegate(
        IntentAction.EXPORT_DATA, IntentCategory.EXPORT, {"format": fmt}, f"/export {fmt}"
    )


def _cmd_notifications(args: str, context: AssistantContext) -> CommandResult:
    return _delegate(
        IntentAction.LIST_NOTIFICATIONS, IntentCategory.NOTIFICATION, {}, "/notifs"
    )


def _cmd_clear(args: str, context: AssistantContext) -> CommandResult:
    return CommandResult(
        message="Conversation effacee. Comment puis-je vous aider ?",
        kind=CommandOutcome.CLEAR_CONVERSATION,
    )


def _cmd_team(args: str, context: AssistantContext) -> CommandResult:
    return _delegate(IntentAction.LIST_USERS, IntentCategory.USER, {}, "/equipe")


def _cmd_recap(args: str, context: AssistantContext) -> CommandResult:
    hour = datetime.now().hour
    if hour < 12:
        time_of_day = "ce matin"
    elif hour < 18:
        time_of_day = "cet apres-midi"
    else:
        time_of_day = "ce soir"

    return CommandResult(
        message=(
            f"Voici votre recapitulatif pour {time_of_day} :\n\n"
            "Aucune donnee disponible pour le moment.\n\n"
            "Besoin de details sur un point specifique ?"
        ),
        suggestions=[
            Suggestion(id="sc-tasks-detail", label="Detail taches", icon="tasks",
                       query="Montre-moi mes taches en cours", category=IntentCategory.TASK),
            Suggestion(id="sc-meetings-detail", label="Detail reunions", icon="calendar",
                       query="Mes prochaines reunions", category=IntentCategory.MEETING),
            Suggestion(id="sc-notifs-detail", label="Notifications", icon="bell",
                       query="/notifs", category=IntentCategory.NOTIFICATION),
        ],
    )


def _cmd_shortcuts(args: str, context: AssistantContext) -> CommandResult:
    return CommandResult(
        message=(
            "**Raccourcis clavier :**\n\n"
            "- **Ctrl+J** : Ouvrir/fermer l'assistant\n"
            "- **Ctrl+K** : Recherche globale\n"
            "- **Echap** : Fermer / Annuler le formulaire\n"
            "- **Entree** : Envoyer un message\n"
            "- **Shift+Entree** : Saut de ligne\n\n"
            "**Commandes rapides :**\n\n"
            "- **/tache** : Creer une tache\n"
            "- **/projet** : Creer un projet\n"
            "- **/reunion** : Planifier une reunion\n"
            "- **/chercher** : Rechercher\n"
            "- **/stats** : Statistiques\n"
            "- **/recap** : Recapitulatif du jour\n"
            "- **/clear** : Nouvelle conversation"
        )
    )


SMART_COMMANDS: List[SmartCommand] = [
    SmartCommand("aide", ("help", "h", "?"), "Afficher la liste des commandes",
                 IntentCategory.HELP, None, _cmd_help),
    SmartCommand("tache", ("task", "t"), "Creer une tache rapidement (/tache Mon titre)",
                 IntentCategory.TASK, IntentAction.CREATE_TASK, _cmd_task),
    SmartCommand("projet", ("project", "p"), "Creer un projet rapidement (/projet Mon projet)",
                 IntentCategory.PROJECT, IntentAction.CREATE_PROJECT, _cmd_project),
    SmartCommand("reunion", ("meeting", "meet", "m"), "Planifier une reunion (/reunion Titre)",
                 IntentCategory.MEETING, IntentAction.CREATE_MEETING, _cmd_meeting),
    SmartCommand("aller", ("go", "nav", "navigate"), "Naviguer vers une page (/aller projets)",
                 IntentCategory.NAVIGATION, IntentAction.NAVIGATE_TO, _cmd_navigate),
    SmartCommand("chercher", ("search", "find", "s"), "Rechercher dans l'application (/chercher mot-cle)",
                 IntentCategory.SEARCH, IntentAction.SEARCH_GLOBAL, _cmd_search),
    SmartCommand("conge", ("absence", "leave"), "Poser un conge (/conge)",
                 IntentCategory.ABSENCE, IntentAction.REQUEST_ABSENCE, _cmd_absence),
    SmartCommand("theme", ("dark", "light"), "Changer le theme (/theme sombre)",
                 IntentCategory.SETTINGS, IntentAction.CHANGE_THEME, _cmd_theme),
    SmartCommand("stats", ("statistiques", "kpi", "indicateurs"), "Voir les statistiques rapides",
                 IntentCategory.NAVIGATION, IntentAction.SHOW_STATS, _cmd_stats),
    SmartCommand("export", ("exporter", "download", "dl"), "Exporter des donnees (/export pdf)",
                 IntentCategory.EXPORT, IntentAction.EXPORT_DATA, _cmd_export),
    SmartCommand("notifs", ("notifications", "bell"), "Voir vos notifications",
                 IntentCategory.NOTIFICATION, IntentAction.LIST_NOTIFICATIONS, _cmd_notifications),
    SmartCommand("clear", ("cls", "reset", "nouveau"), "Effacer la conversation et recommencer",
                 IntentCategory.HELP, None, _cmd_clear),
    SmartCommand("equipe", ("team", "membres", "users"), "Voir les membres de l'equipe",
                 IntentCategory.USER, IntentAction.LIST_USERS, _cmd_team),
    SmartCommand("recap", ("resume", "summary", "aujourd'hui"), "Recapitulatif de votre journee",
                 IntentCategory.HELP, None, _cmd_recap),
    SmartCommand("raccourcis", ("shortcuts", "keys"), "Voir les raccourcis clavier",
                 IntentCategory.HELP, None, _cmd_shortcuts),
]


class CommandRegistry:
    def __init__(self, commands: Optional[List[SmartCommand]] = None):
        self._commands = list(commands if commands is not None else SMART_COMMANDS)

    @property
    def commands(self) -> List[SmartCommand]:
        return list(self._commands)

    def find(self, name: str) -> Optional[SmartCommand]:
        name = name.lower()
        return next((cmd for cmd in self._commands if cmd.matches(name)), None)

    def resolve(self, text: str) -> Optional[SmartCommand]:
        """The command a slash-prefixed text would run, if any."""
        if not is_smart_command(text):
            return None
        name, _ = parse_smart_command(text)
        return self.find(name)

    def execute(self, text: str, context: AssistantContext) -> CommandResult:
        name, args = parse_smart_command(text)
        command = self.find(name)

        if command is None:
            logger.info(f"Unknown smart command '/{name}'")
            return CommandResult(
                message=(
                    f"Commande **/{name}** non reconnue.\n\n"
                    "Tapez **/aide** pour voir les commandes disponibles."
                ),
                suggestions=[
                    Suggestion(id="sc-help", label="Voir les commandes", icon="info",
                               query="/aide", category=IntentCategory.HELP),
                ],
            )

        logger.debug(f"Running smart command /{command.command} args='{args}'")
        return command.handler(args, context)

    def autocomplete(self, partial: str) -> List[Suggestion]:
        """Commands whose name or an alias starts with the typed prefix."""
        search = partial.strip()[len(COMMAND_PREFIX):].lower()
        matching = [
            cmd for cmd in self._commands
            if cmd.command.startswith(search) or any(a.startswith(search) for a in cmd.aliases)
        ]
        return [self._as_suggestion(cmd) for cmd in matching[:MAX_AUTOCOMPLETE]]

    @staticmethod
    def _as_suggestion(cmd: SmartCommand) -> Suggestion:
        return Suggestion(
            id=f"cmd-{cmd.command}",
            label=f"/{cmd.command}",
            icon="sparkles",
            query=f"/{cmd.command} ",
            category=cmd.category,
            description=cmd.description,
        )
