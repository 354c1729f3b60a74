"""
Static suggestion catalogues used by the SuggestionEngine.
"""

from typing import Dict, List, Optional

from memora_assistant.schemas.results import Suggestion


def _s(id: str, label: str, icon: str, query: str, category: str, description: Optional[str] = None) -> Suggestion:
    return Suggestion(
        id=id, label=label, icon=icon, query=query, category=category, description=description
    )


WELCOME_SUGGESTIONS: List[Suggestion] = [
    _s("sug-create-task", "Creer une tache", "tasks", "Je veux creer une nouvelle tache", "task", "Nouvelle tache rapide"),
    _s("sug-create-project", "Nouveau projet", "folder", "Creer un nouveau projet", "project", "Demarrer un projet"),
    _s("sug-create-meeting", "Planifier une reunion", "calendar", "Planifier une reunion", "meeting", "Organiser un evenement"),
    _s("sug-list-tasks", "Mes taches", "tasks", "Montre-moi mes taches en cours", "task", "Voir mes taches en cours"),
    _s("sug-search", "Rechercher", "search", "Rechercher ", "search", "Trouver quelque chose"),
    _s("sug-navigate", "Naviguer", "home", "Emmene-moi vers ", "navigation", "Aller quelque part"),
    _s("sug-absence", "Demander un conge", "calendar", "Je veux poser un conge", "absence", "Poser une absence"),
    _s("sug-help", "Aide", "info", "Aide-moi a comprendre ce que tu peux faire", "help", "Comment ca marche ?"),
]

SUGGESTION_GROUPS: Dict[str, List[Suggestion]] = {
    "quick_actions": [
        _s("qa-create-task", "Nouvelle tache", "plus", "Creer une nouvelle tache", "task", "Creer rapidement"),
        _s("qa-create-meeting", "Planifier reunion", "calendar", "Planifier une reunion", "meeting", "Organiser un evenement"),
        _s("qa-request-absence", "Poser un conge", "calendar", "Je veux poser un conge", "absence", "Demander une absence"),
    ],
    "views": [
        _s("v-my-tasks", "Mes taches", "tasks", "Montre-moi mes taches", "task", "Taches assignees"),
        _s("v-my-projects", "Mes projets", "folder", "Liste des projets", "project", "Projets en cours"),
        _s("v-meetings", "Reunions a venir", "calendar", "Mes prochaines reunions", "meeting", "Prochaines reunions"),
        _s("v-notifications", "Notifications", "bell", "Montre-moi mes notifications", "notification", "Voir les notifications"),
    ],
    "management": [
        _s("m-team", "Equipe", "users", "Montre-moi les membres de l'equipe", "user", "Voir les membres"),
        _s("m-stats", "Statistiques", "stats", "Montre-moi les stats", "navigation", "Indicateurs cles"),
        _s("m-export", "Exporter", "download", "Exporter les donnees en PDF", "export", "Exporter des donnees"),
    ],
}

# Keyed by the module detected from the current page
CONTEXTUAL_SUGGESTIONS: Dict[str, List[Suggestion]] = {
    "dashboard": [
        _s("ctx-recent-tasks", "Taches recentes", "tasks", "Montre-moi mes taches en cours", "task", "Voir les dernieres taches"),
        _s("ctx-upcoming-meetings", "Prochaines reunions", "calendar", "Quelles sont mes prochaines reunions ?", "meeting", "Reunions a venir"),
        _s("ctx-create-task", "Nouvelle tache", "plus", "Creer une nouvelle tache", "task", "Creer une tache rapidement"),
        _s("ctx-stats", "Statistiques", "stats", "Montre-moi les stats", "navigation", "Voir les indicateurs"),
    ],
    "project": [
        _s("ctx-new-project", "Nouveau projet", "folder", "Creer un nouveau projet", "project", "Creer un projet"),
        _s("ctx-list-projects", "Tous les projets", "folder", "Liste des projets", "project", "Lister les projets"),
        _s("ctx-project-tasks", "Taches du projet", "tasks", "Montre-moi les taches de ce projet", "task", "Voir les taches"),
        _s("ctx-export-project", "Exporter", "download", "Exporter les donnees du projet en PDF", "export", "Exporter les donnees"),
    ],
    "task": [
        _s("ctx-new-task", "Nouvelle tache", "plus", "Creer une nouvelle tache", "task", "Ajouter une tache"),
        _s("ctx-my-tasks", "Mes taches", "tasks", "Montre-moi mes taches", "task", "Mes taches assignees"),
        _s("ctx-complete-task", "Terminer une tache", "check", "Terminer la tache ", "task", "Marquer comme fait"),
    ],
    "meeting": [
        _s("ctx-new-meeting", "Nouvelle reunion", "calendar", "Planifier une reunion", "meeting", "Planifier une reunion"),
        _s("ctx-upcoming", "Prochaines", "clock", "Quelles sont mes prochaines reunions ?", "meeting", "Reunions a venir"),
        _s("ctx-standup", "Standup", "calendar", "Planifier un standup", "meeting", "Planifier un standup"),
        _s("ctx-cancel-meeting", "Annuler", "close", "Annuler la reunion ", "meeting", "Annuler une reunion"),
    ],
    "absence": [
        _s("ctx-request-absence", "Poser un conge", "calendar", "Je veux poser un conge paye", "absence", "Demander une absence"),
        _s("ctx-my-absences", "Mes absences", "clock", "Montre-moi mes absences", "absence", "Voir mes demandes"),
        _s("ctx-rtt", "Poser un RTT", "calendar", "Je veux poser un RTT", "absence", "Demander un RTT"),
    ],
    "recruitment": [
        _s("ctx-new-offer", "Nouvelle offre", "briefcase", "Creer une offre d'emploi", "recruitment", "Publier un poste"),
        _s("ctx-candidates", "Candidats", "users", "Montre-moi les candidats", "recruitment", "Voir les candidats"),
        _s("ctx-interviews", "Entretiens", "calendar", "Planifier un entretien", "meeting", "Planifier un entretien"),
        _s("ctx-export-recruitment", "Exporter", "download", "Exporter les donnees de recrutement", "export", "Exporter les donnees"),
    ],
    "training": [
        _s("ctx-new-training", "Nouvelle formation", "training", "Creer une nouvelle formation", "training", "Creer une session"),
        _s("ctx-list-trainings", "Toutes les formations", "training", "Liste des formations", "training", "Voir les formations"),
    ],
    "personnel": [
        _s("ctx-list-members", "Equipe", "users", "Montre-moi les membres de l'equipe", "user", "Voir l'equipe"),
        _s("ctx-find-member", "Trouver quelqu'un", "search", "Trouver ", "search", "Chercher un collaborateur"),
    ],
    "settings": [
        _s("ctx-theme", "Changer le theme", "moon", "Passer en mode sombre", "settings", "Clair / Sombre"),
        _s("ctx-export-data", "Exporter mes donnees", "download", "Exporter toutes mes donnees", "export", "Export complet"),
    ],
}

# Shown after an immediate action of the given category
FOLLOW_UP_SUGGESTIONS: Dict[str, List[Suggestion]] = {
    "task": [
        SUGGESTION_GROUPS["quick_actions"][0],
        _s("fu-view-tasks", "Voir les taches", "tasks", "Montre-moi mes taches", "task"),
    ],
    "project": [
        _s("fu-project-tasks", "Taches du projet", "tasks", "Montre-moi les taches du projet", "task"),
        _s("fu-new-project", "Nouveau projet", "plus", "Creer un projet", "project"),
    ],
    "meeting": [
        _s("fu-next-meetings", "Prochaines reunions", "calendar", "Mes prochaines reunions", "meeting"),
        _s("fu-new-meeting", "Planifier reunion", "plus", "Planifier une reunion", "meeting"),
    ],
    "absence": [
        _s("fu-my-absences", "Mes absences", "calendar", "Voir mes absences", "absence"),
        _s("fu-new-absence", "Nouveau conge", "plus", "Poser un conge", "absence"),
    ],
    "navigation": SUGGESTION_GROUPS["views"][:3],
}

HELP_SUGGESTION = _s("fu-help", "Aide", "info", "Que peux-tu faire ?", "help")

# Shown once a flow's action has been executed
FLOW_COMPLETION_SUGGESTIONS: Dict[str, List[Suggestion]] = {
    "create_task": [
        _s("fc-list-tasks", "Voir mes taches", "tasks", "Montre-moi mes taches", "task"),
        _s("fc-another-task", "Creer une autre tache", "plus", "Creer une nouvelle tache", "task"),
        _s("fc-go-tasks", "Aller aux taches", "tasks", "Emmene-moi vers les taches", "navigation"),
    ],
    "create_project": [
        _s("fc-list-projects", "Voir les projets", "folder", "Liste des projets", "project"),
        _s("fc-add-task", "Ajouter une tache", "plus", "Creer une tache", "task"),
    ],
    "create_meeting": [
        _s("fc-list-meetings", "Voir les reunions", "calendar", "Mes prochaines reunions", "meeting"),
        _s("fc-another-meeting", "Planifier une autre", "plus", "Planifier une reunion", "meeting"),
    ],
    "request_absence": [
        _s("fc-list-absences", "Mes absences", "calendar", "Voir mes absences", "absence"),
        _s("fc-go-absences", "Page absences", "calendar", "Emmene-moi vers les absences", "navigation"),
    ],
}

# Attached by the executor to the result of a specific immediate action
ACTION_FOLLOW_UPS: Dict[str, List[Suggestion]] = {
    "list_tasks": [
        _s("fs-create-task", "Creer une tache", "plus", "Creer une nouvelle tache", "task"),
        _s("fs-filter-inprogress", "En cours seulement", "filter", "Montre-moi mes taches en cours", "task"),
    ],
    "list_projects": [
        _s("fs-create-project", "Nouveau projet", "plus", "Creer un nouveau projet", "project"),
        _s("fs-project-tasks", "Voir les taches", "tasks", "Montre-moi les taches", "task"),
    ],
    "list_meetings": [
        _s("fs-new-meeting", "Nouvelle reunion", "plus", "Planifier une reunion", "meeting"),
    ],
    "list_absences": [
        _s("fs-new-absence", "Poser un conge", "calendar", "Je veux poser un conge", "absence"),
    ],
    "list_notifications": [
        _s("fs-mark-read", "Tout marquer lu", "check", "Marquer toutes les notifications comme lues", "notification"),
    ],
    "list_trainings": [
        _s("fs-new-training", "Nouvelle formation", "plus", "Creer une formation", "training"),
    ],
    "complete_task": [
        _s("fs-list-tasks", "Voir mes taches", "tasks", "Montre-moi mes taches", "task"),
    ],
    "show_stats": [
        _s("fs-go-stats", "Page statistiques", "stats", "Emmene-moi vers les statistiques", "navigation"),
    ],
    "approve_absence": [
        _s("fs-list-abs", "Voir les absences", "calendar", "Montre-moi les absences", "absence"),
    ],
    "reject_absence": [
        _s("fs-list-abs", "Voir les absences", "calendar", "Montre-moi les absences", "absence"),
    ],
    "cancel_meeting": [
        _s("fs-list-meetings", "Voir les reunions", "calendar", "Montre-moi mes reunions", "meeting"),
    ],
}
