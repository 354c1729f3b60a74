"""
Canned assistant replies.
"""

GREETING_RESPONSES = [
    "Salut ! Comment ca va ? Dis-moi ce dont t'as besoin aujourd'hui.",
    "Hey ! Qu'est-ce que je peux faire pour toi ?",
    "Coucou ! Besoin d'un coup de main sur un projet, une tache, ou autre ?",
    "Salut ! Dis-moi ce que tu veux faire, je m'en occupe.",
    "Hey ! Pret a avancer ? Dis-moi tout.",
    "Yo ! Qu'est-ce qu'on fait aujourd'hui ?",
]

# Rendered by the help template, one bold title per section
HELP_SECTIONS = [
    {"title": "Taches", "lines": [
        "Creer des taches et les terminer",
        "Lister vos taches (en cours, a faire, terminees)",
    ]},
    {"title": "Projets", "lines": [
        "Creer des projets",
        "Voir la liste des projets",
    ]},
    {"title": "Reunions", "lines": [
        "Planifier des reunions, standups, retrospectives",
        "Voir et annuler les prochaines reunions",
    ]},
    {"title": "Absences", "lines": [
        "Poser un conge (paye, RTT, maladie)",
        "Voir vos demandes d'absence",
    ]},
    {"title": "Navigation", "lines": [
        "Naviguer vers n'importe quelle page",
        "Ex: *\"Emmene-moi vers les projets\"*",
    ]},
    {"title": "Recherche", "lines": [
        "Rechercher dans toute l'application",
        "Trouver des utilisateurs, projets, taches",
    ]},
    {"title": "Recrutement & Formation", "lines": [
        "Creer des offres d'emploi",
        "Gerer les formations",
    ]},
    {"title": "Parametres", "lines": [
        "Changer le theme (clair/sombre)",
        "Exporter vos donnees (PDF, Excel, CSV)",
    ]},
]

UNKNOWN_INTENT = (
    "Je n'ai pas bien compris votre demande. "
    "Pouvez-vous reformuler ou essayer l'une de ces suggestions ?"
)
PERMISSION_DENIED = "Desole, vous n'avez pas les permissions necessaires pour effectuer cette action."
UNSUPPORTED_ACTION = (
    "Je ne peux pas encore faire ca depuis l'assistant. "
    "Rendez-vous sur la page concernee pour le faire."
)
UNEXPECTED_ERROR = "Oups, une erreur inattendue s'est produite. Veuillez reessayer."
DOMAIN_FAILURE = "L'action n'a pas pu aboutir. Veuillez reessayer plus tard."
