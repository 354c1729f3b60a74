"""
Static catalogue driving the rule-based intent detector.

Keywords are written already normalised (lower-case, no accents) so they can
be matched directly against normalised user input.
"""

from typing import Dict, List, NamedTuple


class KeywordIntent(NamedTuple):
    category: str
    action: str
    weight: float


class NavigationTarget(NamedTuple):
    path: str
    label: str
    needs_group: bool


def _k(category: str, action: str, weight: float) -> KeywordIntent:
    return KeywordIntent(category, action, weight)


INTENT_KEYWORDS: Dict[str, List[KeywordIntent]] = {
    # --- Tasks ---
    "tache": [_k("task", "create_task", 0.6), _k("task", "list_tasks", 0.3)],
    "taches": [_k("task", "list_tasks", 0.8)],
    "creer une tache": [_k("task", "create_task", 0.95)],
    "nouvelle tache": [_k("task", "create_task", 0.95)],
    "ajouter une tache": [_k("task", "create_task", 0.95)],
    "modifier la tache": [_k("task", "update_task", 0.9)],
    "supprimer la tache": [_k("task", "delete_task", 0.9)],
    "terminer la tache": [_k("task", "complete_task", 0.9)],
    "finir la tache": [_k("task", "complete_task", 0.9)],
    "assigner la tache": [_k("task", "assign_task", 0.9)],
    "mes taches": [_k("task", "list_tasks", 0.95)],
    "liste des taches": [_k("task", "list_tasks", 0.95)],
    "taches en cours": [_k("task", "list_tasks", 0.9)],
    "taches a faire": [_k("task", "list_tasks", 0.9)],
    "todo": [_k("task", "list_tasks", 0.7)],

    # --- Projects ---
    "projet": [_k("project", "create_project", 0.5), _k("project", "list_projects", 0.4)],
    "projets": [_k("project", "list_projects", 0.8)],
    "creer un projet": [_k("project", "create_project", 0.95)],
    "nouveau projet": [_k("project", "create_project", 0.95)],
    "ajouter un projet": [_k("project", "create_project", 0.95)],
    "modifier le projet": [_k("project", "update_project", 0.9)],
    "supprimer le projet": [_k("project", "delete_project", 0.9)],
    "mes projets": [_k("project", "list_projects", 0.95)],
    "liste des projets": [_k("project", "list_projects", 0.95)],

    # --- Meetings ---
    "reunion": [_k("meeting", "create_meeting", 0.5), _k("meeting", "list_meetings", 0.4)],
    "reunions": [_k("meeting", "list_meetings", 0.8)],
    "creer une reunion": [_k("meeting", "create_meeting", 0.95)],
    "planifier une reunion": [_k("meeting", "create_meeting", 0.95)],
    "organiser une reunion": [_k("meeting", "create_meeting", 0.95)],
    "nouvelle reunion": [_k("meeting", "create_meeting", 0.95)],
    "annuler la reunion": [_k("meeting", "cancel_meeting", 0.9)],
    "mes reunions": [_k("meeting", "list_meetings", 0.95)],
    "prochaines reunions": [_k("meeting", "list_meetings", 0.9)],
    "standup": [_k("meeting", "create_meeting", 0.8)],
    "retrospective": [_k("meeting", "create_meeting", 0.8)],
    "entretien": [_k("meeting", "create_meeting", 0.8)],

    # --- Absences ---
    "absence": [_k("absence", "request_absence", 0.6), _k("absence", "list_absences", 0.3)],
    "absences": [_k("absence", "list_absences", 0.8)],
    "conge": [_k("absence", "request_absence", 0.85)],
    "conges": [_k("absence", "list_absences", 0.8)],
    "poser un conge": [_k("absence", "request_absence", 0.95)],
    "demander un conge": [_k("absence", "request_absence", 0.95)],
    "declarer une absence": [_k("absence", "request_absence", 0.95)],
    "vacances": [_k("absence", "request_absence", 0.8)],
    "rtt": [_k("absence", "request_absence", 0.85)],
    "maladie": [_k("absence", "request_absence", 0.85)],
    "approuver absence": [_k("absence", "approve_absence", 0.95)],
    "refuser absence": [_k("absence", "reject_absence", 0.95)],

    # --- Navigation ---
    "aller": [_k("navigation", "navigate_to", 0.7)],
    "aller a": [_k("navigation", "navigate_to", 0.85)],
    "aller vers": [_k("navigation", "navigate_to", 0.85)],
    "emmene-moi": [_k("navigation", "navigate_to", 0.9)],
    "emmene moi": [_k("navigation", "navigate_to", 0.9)],
    "naviguer": [_k("navigation", "navigate_to", 0.85)],
    "ouvrir la page": [_k("navigation", "navigate_to", 0.9)],
    "va sur": [_k("navigation", "navigate_to", 0.85)],
    "montre-moi": [_k("navigation", "navigate_to", 0.7)],
    "dashboard": [_k("navigation", "navigate_to", 0.8)],
    "tableau de bord": [_k("navigation", "navigate_to", 0.85)],
    "accueil": [_k("navigation", "navigate_to", 0.85)],
    "profil": [_k("navigation", "navigate_to", 0.85)],
    "parametres": [_k("navigation", "navigate_to", 0.85)],
    "reglages": [_k("navigation", "navigate_to", 0.85)],
    "statistiques": [_k("navigation", "navigate_to", 0.8)],
    "admin": [_k("navigation", "navigate_to", 0.8)],
    "administration": [_k("navigation", "navigate_to", 0.85)],

    # --- Search ---
    "rechercher": [_k("search", "search_global", 0.9)],
    "chercher": [_k("search", "search_global", 0.9)],
    "trouver": [_k("search", "search_global", 0.85)],
    "ou est": [_k("search", "search_global", 0.8)],
    "ou se trouve": [_k("search", "search_global", 0.8)],

    # --- Notifications ---
    "notifications": [_k("notification", "list_notifications", 0.9)],
    "notification": [_k("notification", "list_notifications", 0.8)],
    "marquer comme lu": [_k("notification", "mark_notifications_read", 0.95)],
    "comme lues": [_k("notification", "mark_notifications_read", 0.95)],
    "lire notifications": [_k("notification", "mark_notifications_read", 0.85)],

    # --- Users ---
    "utilisateurs": [_k("user", "list_users", 0.85)],
    "utilisateur": [_k("user", "find_user", 0.7)],
    "membres": [_k("user", "list_users", 0.8)],
    "equipe": [_k("user", "list_users", 0.75)],
    "collegue": [_k("user", "find_user", 0.7)],
    "collaborateur": [_k("user", "find_user", 0.7)],

    # --- Settings ---
    "theme": [_k("settings", "change_theme", 0.85)],
    "mode sombre": [_k("settings", "change_theme", 0.95)],
    "mode clair": [_k("settings", "change_theme", 0.95)],
    "dark mode": [_k("settings", "change_theme", 0.95)],
    "light mode": [_k("settings", "change_theme", 0.95)],
    "mode admin": [_k("settings", "toggle_admin_mode", 0.9)],

    # --- Export ---
    "exporter": [_k("export", "export_data", 0.9)],
    "export": [_k("export", "export_data", 0.85)],
    "telecharger": [_k("export", "export_data", 0.7)],
    "pdf": [_k("export", "export_data", 0.75)],
    "excel": [_k("export", "export_data", 0.75)],
    "csv": [_k("export", "export_data", 0.75)],

    # --- Recruitment ---
    "recrutement": [_k("recruitment", "list_candidates", 0.7)],
    "candidat": [_k("recruitment", "list_candidates", 0.7)],
    "candidats": [_k("recruitment", "list_candidates", 0.85)],
    "offre emploi": [_k("recruitment", "create_job_offer", 0.85)],
    "offre d'emploi": [_k("recruitment", "create_job_offer", 0.9)],
    "nouvelle offre": [_k("recruitment", "create_job_offer", 0.8)],

    # --- Training ---
    "formation": [_k("training", "create_training", 0.5), _k("training", "list_trainings", 0.4)],
    "formations": [_k("training", "list_trainings", 0.85)],
    "nouvelle formation": [_k("training", "create_training", 0.9)],
    "creer une formation": [_k("training", "create_training", 0.95)],

    # --- Groups ---
    "groupe": [_k("group", "navigate_to", 0.6)],
    "groupes": [_k("group", "navigate_to", 0.7)],
    "entite": [_k("group", "navigate_to", 0.6)],

    # --- Help ---
    "aide": [_k("help", "show_help", 0.9)],
    "help": [_k("help", "show_help", 0.9)],
    "comment": [_k("help", "show_help", 0.6)],
    "que peux-tu faire": [_k("help", "show_help", 0.95)],
    "qu'est-ce que": [_k("help", "show_help", 0.6)],
    "fonctionnalites": [_k("help", "show_help", 0.8)],

    # --- Greetings ---
    "bonjour": [_k("greeting", "greet", 0.95)],
    "salut": [_k("greeting", "greet", 0.95)],
    "hello": [_k("greeting", "greet", 0.95)],
    "hey": [_k("greeting", "greet", 0.9)],
    "coucou": [_k("greeting", "greet", 0.95)],
    "bonsoir": [_k("greeting", "greet", 0.95)],
    "ca va": [_k("greeting", "greet", 0.8)],
    "merci": [_k("greeting", "greet", 0.7)],

    # --- Stats ---
    "stats": [_k("navigation", "show_stats", 0.85)],
    "indicateurs": [_k("navigation", "show_stats", 0.8)],
    "kpi": [_k("navigation", "show_stats", 0.85)],
}

# Verbs refining the action inside a category, checked as substrings
ACTION_VERBS: Dict[str, List[str]] = {
    "create": [
        "creer", "ajouter", "nouveau", "nouvelle", "planifier", "organiser",
        "demander", "poser", "publier", "declarer",
    ],
    "update": ["modifier", "changer", "mettre a jour", "editer", "corriger"],
    "delete": ["supprimer", "retirer", "enlever", "annuler"],
    "list": ["lister", "voir", "afficher", "montrer", "montre", "mes", "liste", "prochaines", "prochains"],
    "complete": ["terminer", "finir", "completer", "valider", "marquer"],
    "navigate": ["aller", "naviguer", "emmene", "ouvrir", "va"],
    "search": ["rechercher", "chercher", "trouver", "ou"],
    "assign": ["assigner", "attribuer", "deleguer"],
    "approve": ["approuver", "accepter", "valider"],
    "reject": ["refuser", "rejeter", "decliner"],
}

# (verb, action) pairs tried in order for each category
VERB_REFINEMENTS: Dict[str, List[tuple]] = {
    "task": [
        ("create", "create_task"),
        ("update", "update_task"),
        ("delete", "delete_task"),
        ("complete", "complete_task"),
        ("assign", "assign_task"),
        ("list", "list_tasks"),
    ],
    "project": [
        ("create", "create_project"),
        ("update", "update_project"),
        ("delete", "delete_project"),
        ("list", "list_projects"),
    ],
    "meeting": [
        ("create", "create_meeting"),
        ("delete", "cancel_meeting"),
        ("list", "list_meetings"),
    ],
    "absence": [
        ("create", "request_absence"),
        ("approve", "approve_absence"),
        ("reject", "reject_absence"),
        ("list", "list_absences"),
    ],
}

# Entity value maps, keyed by normalised keyword; first hit wins
PRIORITY_KEYWORDS = {
    "haute": "Haute",
    "urgente": "Haute",
    "important": "Haute",
    "moyenne": "Moyenne",
    "basse": "Basse",
    "faible": "Basse",
}

STATUS_KEYWORDS = {
    "a faire": "A faire",
    "en cours": "En cours",
    "termine": "Termine",
    "fait": "Termine",
    "fini": "Termine",
}

ABSENCE_TYPE_KEYWORDS = {
    "conge paye": "conge_paye",
    "rtt": "rtt",
    "maladie": "maladie",
    "vacances": "conge_paye",
}

MEETING_TYPE_KEYWORDS = {
    "standup": "standup",
    "retrospective": "retrospective",
    "revue": "revue",
    "entretien": "entretien",
}

EXPORT_FORMATS = ["pdf", "excel", "csv"]

NAVIGATION_TARGETS: Dict[str, NavigationTarget] = {
    "accueil": NavigationTarget("/hub/{group_id}", "Tableau de bord", True),
    "dashboard": NavigationTarget("/hub/{group_id}", "Tableau de bord", True),
    "tableau de bord": NavigationTarget("/hub/{group_id}", "Tableau de bord", True),
    "projets": NavigationTarget("/hub/{group_id}/projects", "Projets", True),
    "projet": NavigationTarget("/hub/{group_id}/projects", "Projets", True),
    "taches": NavigationTarget("/hub/{group_id}/tasks", "Taches", True),
    "tache": NavigationTarget("/hub/{group_id}/tasks", "Taches", True),
    "reunions": NavigationTarget("/hub/{group_id}/meetings", "Reunions", True),
    "reunion": NavigationTarget("/hub/{group_id}/meetings", "Reunions", True),
    "calendrier": NavigationTarget("/hub/{group_id}/meetings", "Calendrier", True),
    "absences": NavigationTarget("/hub/{group_id}/absences", "Absences", True),
    "conges": NavigationTarget("/hub/{group_id}/absences", "Conges", True),
    "personnel": NavigationTarget("/hub/{group_id}/personnel", "Personnel", True),
    "recrutement": NavigationTarget("/hub/{group_id}/recruitment", "Recrutement", True),
    "formations": NavigationTarget("/hub/{group_id}/training", "Formations", True),
    "formation": NavigationTarget("/hub/{group_id}/training", "Formations", True),
    "momentum": NavigationTarget("/hub/{group_id}/momentum", "Momentum", True),
    "profil": NavigationTarget("/profile", "Mon profil", False),
    "mon profil": NavigationTarget("/profile", "Mon profil", False),
    "parametres": NavigationTarget("/settings/account", "Parametres", False),
    "reglages": NavigationTarget("/settings/account", "Parametres", False),
    "parametres compte": NavigationTarget("/settings/account", "Parametres du compte", False),
    "securite": NavigationTarget("/settings/security", "Securite", False),
    "preferences": NavigationTarget("/settings/preferences", "Preferences", False),
    "parametres notifications": NavigationTarget(
        "/settings/notifications", "Parametres de notifications", False
    ),
    "donnees": NavigationTarget("/settings/data", "Donnees", False),
    "utilisateurs": NavigationTarget("/users", "Utilisateurs", False),
    "groupes": NavigationTarget("/groups", "Groupes", False),
    "statistiques": NavigationTarget("/stats", "Statistiques", False),
    "stats": NavigationTarget("/stats", "Statistiques", False),
    "admin": NavigationTarget("/admin/access", "Administration", False),
    "administration": NavigationTarget("/admin/access", "Administration", False),
}

# Actions that need several inputs and therefore run as a guided flow
FLOW_ACTIONS = frozenset({
    "create_task",
    "create_project",
    "create_meeting",
    "request_absence",
    "create_job_offer",
    "create_training",
})
