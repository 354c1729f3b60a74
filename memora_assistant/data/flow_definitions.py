from memora_assistant.domain.models import (
    CONFIRM_FIELD,
    FlowDefinition,
    FlowOption,
    FlowStep,
)
from memora_assistant.domain import validators

# ==============================================================================
# TASK CREATION
# ==============================================================================

CREATE_TASK_STEPS = [
    FlowStep(
        id="task-title",
        field="title",
        label="C'est quoi le titre de ta tache ?",
        type="text",
        placeholder="Ex: Implementer le module d'export",
        validation=validators.min_length(3),
        entity="name",
    ),
    FlowStep(
        id="task-description",
        field="description",
        label="Tu veux ajouter une description ? (optionnel)",
        type="textarea",
        placeholder="Decris la tache en detail...",
        required=False,
    ),
    FlowStep(
        id="task-priority",
        field="priority",
        label="Quelle priorite tu mets ?",
        type="select",
        options=[
            FlowOption(value="Haute", label="Haute"),
            FlowOption(value="Moyenne", label="Moyenne"),
            FlowOption(value="Basse", label="Basse"),
        ],
    ),
    FlowStep(
        id="task-status",
        field="status",
        label="On la met en quel statut ?",
        type="select",
        options=[
            FlowOption(value="A faire", label="A faire"),
            FlowOption(value="En cours", label="En cours"),
        ],
    ),
    FlowStep(
        id="task-assignee",
        field="assignee",
        label="Tu l'assignes a qui ? (optionnel)",
        type="text",
        placeholder="Nom du collaborateur",
        required=False,
    ),
    FlowStep(
        id="task-duedate",
        field="due_date",
        label="Pour quand ? (format: AAAA-MM-JJ, optionnel)",
        type="date",
        placeholder="2026-03-15",
        required=False,
        validation=validators.iso_date,
        entity="date",
    ),
    FlowStep(
        id="task-confirm",
        field=CONFIRM_FIELD,
        label="On cree ca ?",
        type="confirm",
    ),
]

# ==============================================================================
# PROJECT CREATION
# ==============================================================================

CREATE_PROJECT_STEPS = [
    FlowStep(
        id="project-name",
        field="name",
        label="Comment tu veux appeler ton projet ?",
        type="text",
        placeholder="Ex: Refonte de l'interface utilisateur",
        validation=validators.min_length(3),
    ),
    FlowStep(
        id="project-description",
        field="description",
        label="Une petite description ? (optionnel)",
        type="textarea",
        placeholder="Objectifs, perimetre, equipe...",
        required=False,
    ),
    FlowStep(
        id="project-status",
        field="status",
        label="On le demarre en quel statut ?",
        type="select",
        options=[
            FlowOption(value="todo", label="A faire"),
            FlowOption(value="in_progress", label="En cours"),
        ],
    ),
    FlowStep(
        id="project-startdate",
        field="start_date",
        label="Date de debut ? (format: AAAA-MM-JJ, optionnel)",
        type="date",
        placeholder="2026-03-01",
        required=False,
        validation=validators.iso_date,
        entity="date",
    ),
    FlowStep(
        id="project-enddate",
        field="end_date",
        label="Date de fin prevue ? (format: AAAA-MM-JJ, optionnel)",
        type="date",
        placeholder="2026-06-30",
        required=False,
        validation=validators.iso_date,
    ),
    FlowStep(
        id="project-confirm",
        field=CONFIRM_FIELD,
        label="On lance ce projet ?",
        type="confirm",
    ),
]

# ==============================================================================
# MEETING CREATION
# ==============================================================================

CREATE_MEETING_STEPS = [
    FlowStep(
        id="meeting-title",
        field="title",
        label="C'est quoi le titre de la reunion ?",
        type="text",
        placeholder="Ex: Point d'equipe hebdomadaire",
        validation=validators.min_length(3),
        entity="name",
    ),
    FlowStep(
        id="meeting-date",
        field="date",
        label="A quelle date ? (format: AAAA-MM-JJ)",
        type="date",
        placeholder="2026-03-15",
        validation=validators.iso_date,
    ),
    FlowStep(
        id="meeting-time",
        field="time",
        label="A quelle heure ? (format: HH:MM)",
        type="text",
        placeholder="14:00",
        validation=validators.clock_time,
    ),
    FlowStep(
        id="meeting-duration",
        field="duration",
        label="Duree prevue ?",
        type="select",
        options=[
            FlowOption(value="15min", label="15 minutes"),
            FlowOption(value="30min", label="30 minutes"),
            FlowOption(value="45min", label="45 minutes"),
            FlowOption(value="1h", label="1 heure"),
            FlowOption(value="1h30", label="1h30"),
            FlowOption(value="2h", label="2 heures"),
        ],
    ),
    FlowStep(
        id="meeting-location",
        field="location",
        label="Lieu ou lien de la reunion ? (optionnel)",
        type="text",
        placeholder="Salle A3 / https://meet.google.com/...",
        required=False,
    ),
    FlowStep(
        id="meeting-description",
        field="description",
        label="Notes ou ordre du jour ? (optionnel)",
        type="textarea",
        placeholder="Points a discuter...",
        required=False,
    ),
    FlowStep(
        id="meeting-confirm",
        field=CONFIRM_FIELD,
        label="Confirmer la creation de la reunion ?",
        type="confirm",
    ),
]

# ==============================================================================
# ABSENCE REQUEST
# ==============================================================================

REQUEST_ABSENCE_STEPS = [
    FlowStep(
        id="absence-start",
        field="start_date",
        label="Date de debut ? (format: AAAA-MM-JJ)",
        type="date",
        placeholder="2026-03-20",
        validation=validators.iso_date,
        entity="date",
    ),
    FlowStep(
        id="absence-end",
        field="end_date",
        label="Date de fin ? (format: AAAA-MM-JJ)",
        type="date",
        placeholder="2026-03-24",
        validation=validators.iso_date,
    ),
    FlowStep(
        id="absence-type",
        field="type",
        label="Quel type d'absence ?",
        type="select",
        options=[
            FlowOption(value="conge_paye", label="Conge paye"),
            FlowOption(value="rtt", label="RTT"),
            FlowOption(value="maladie", label="Maladie"),
            FlowOption(value="autre", label="Autre"),
        ],
        entity="absence_type",
    ),
    FlowStep(
        id="absence-reason",
        field="reason",
        label="Motif (optionnel)",
        type="textarea",
        placeholder="Raison de votre absence...",
        required=False,
    ),
    FlowStep(
        id="absence-confirm",
        field=CONFIRM_FIELD,
        label="Confirmer la demande d'absence ?",
        type="confirm",
    ),
]

# ==============================================================================
# JOB OFFER CREATION
# ==============================================================================

CREATE_JOB_OFFER_STEPS = [
    FlowStep(
        id="offer-title",
        field="title",
        label="Intitule du poste ?",
        type="text",
        placeholder="Ex: Developpeur Full-Stack Senior",
        validation=validators.min_length(3),
        entity="name",
    ),
    FlowStep(
        id="offer-contract",
        field="contract_type",
        label="Type de contrat ?",
        type="select",
        options=[
            FlowOption(value="cdi", label="CDI"),
            FlowOption(value="cdd", label="CDD"),
            FlowOption(value="stage", label="Stage"),
            FlowOption(value="alternance", label="Alternance"),
            FlowOption(value="freelance", label="Freelance"),
        ],
    ),
    FlowStep(
        id="offer-description",
        field="description",
        label="Description du poste",
        type="textarea",
        placeholder="Missions, competences, avantages...",
        validation=validators.min_length(10),
    ),
    FlowStep(
        id="offer-confirm",
        field=CONFIRM_FIELD,
        label="Publier cette offre d'emploi ?",
        type="confirm",
    ),
]

# ==============================================================================
# TRAINING CREATION
# ==============================================================================

CREATE_TRAINING_STEPS = [
    FlowStep(
        id="training-title",
        field="title",
        label="Titre de la formation ?",
        type="text",
        placeholder="Ex: Introduction a TypeScript",
        validation=validators.min_length(3),
        entity="name",
    ),
    FlowStep(
        id="training-category",
        field="category",
        label="Categorie ?",
        type="select",
        options=[
            FlowOption(value="technique", label="Technique"),
            FlowOption(value="management", label="Management"),
            FlowOption(value="securite", label="Securite"),
            FlowOption(value="soft_skills", label="Soft Skills"),
            FlowOption(value="onboarding", label="Onboarding"),
        ],
    ),
    FlowStep(
        id="training-description",
        field="description",
        label="Description (optionnel)",
        type="textarea",
        placeholder="Contenu, objectifs, prerequis...",
        required=False,
    ),
    FlowStep(
        id="training-confirm",
        field=CONFIRM_FIELD,
        label="Creer cette formation ?",
        type="confirm",
    ),
]


HARDCODED_FLOWS = {
    "create_task": FlowDefinition(
        id="flow-create-task",
        action="create_task",
        title="Creer une tache",
        description="Je vais te guider pour creer une nouvelle tache.",
        steps=CREATE_TASK_STEPS,
    ),
    "create_project": FlowDefinition(
        id="flow-create-project",
        action="create_project",
        title="Creer un projet",
        description="Creons ensemble un nouveau projet.",
        steps=CREATE_PROJECT_STEPS,
    ),
    "create_meeting": FlowDefinition(
        id="flow-create-meeting",
        action="create_meeting",
        title="Planifier une reunion",
        description="Organisons une nouvelle reunion.",
        steps=CREATE_MEETING_STEPS,
    ),
    "request_absence": FlowDefinition(
        id="flow-request-absence",
        action="request_absence",
        title="Declarer une absence",
        description="Je vais t'aider a soumettre ta demande d'absence.",
        steps=REQUEST_ABSENCE_STEPS,
    ),
    "create_job_offer": FlowDefinition(
        id="flow-create-job-offer",
        action="create_job_offer",
        title="Creer une offre d'emploi",
        description="Publions une nouvelle offre de recrutement.",
        steps=CREATE_JOB_OFFER_STEPS,
    ),
    "create_training": FlowDefinition(
        id="flow-create-training",
        action="create_training",
        title="Creer une formation",
        description="Mettons en place une nouvelle formation.",
        steps=CREATE_TRAINING_STEPS,
    ),
}
