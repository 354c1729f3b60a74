"""
Message building for guided flows.

Short re-prompts are plain format strings; the longer multi-part messages
(flow start, confirmation summary, completion) are Jinja2 templates.
"""

from typing import Dict, List

from ...domain.models import CONFIRM_FIELD, FlowDefinition, FlowStep
from ...state.models import ActiveFlow
from .loader import render
from .templates import Template

# =============================================================================
# TEMPLATES
# =============================================================================

STEP_QUESTION = "**{label}**"
OPTION_LINE = "{index}. {label}"
INVALID_CHOICE = "Choix invalide. Veuillez choisir parmi :\n\n{options}"
VALIDATION_ERROR = "{error}. Veuillez reessayer.\n\n**{label}**"
FIELD_REQUIRED = "Ce champ est requis.\n\n{prompt}"
CONFIRM_REPROMPT = "Repondez **oui** pour confirmer ou **non** pour annuler.\n\n**{label}**"
FLOW_CANCELLED = "D'accord, l'action a ete annulee. Que puis-je faire d'autre ?"
FLOW_NOT_FOUND = (
    "Desole, je ne sais pas encore guider cette action. "
    "Essayez une autre demande ou tapez **/aide**."
)


# =============================================================================
# BUILDER FUNCTIONS
# =============================================================================

def build_options_list(step: FlowStep) -> str:
    return "\n".join(
        OPTION_LINE.format(index=i, label=opt.label)
        for i, opt in enumerate(step.options, start=1)
    )


def build_step_prompt(step: FlowStep) -> str:
    """Bold question, followed by the numbered options of a select step."""
    prompt = STEP_QUESTION.format(label=step.label)
    if step.type == "select" and step.options:
        prompt += "\n\n" + build_options_list(step)
    return prompt


def build_invalid_choice(step: FlowStep) -> str:
    return INVALID_CHOICE.format(options=build_options_list(step))


def build_validation_error(step: FlowStep, error: str) -> str:
    return VALIDATION_ERROR.format(error=error.rstrip("."), label=step.label)


def build_field_required(step: FlowStep) -> str:
    return FIELD_REQUIRED.format(prompt=build_step_prompt(step))


def build_confirm_reprompt(step: FlowStep) -> str:
    return CONFIRM_REPROMPT.format(label=step.label)


def collected_items(flow: ActiveFlow) -> List[Dict[str, str]]:
    """
    (label, display value) pairs for every non-empty collected field, in
    step order. Select values are shown by their option label.
    """
    items = []
    for step in flow.steps:
        if step.field == CONFIRM_FIELD:
            continue
        value = flow.collected_data.get(step.field)
        if not value:
            continue
        items.append({"label": step.short_label, "value": step.option_label(value)})
    return items


def build_summary(flow: ActiveFlow, confirm_step: FlowStep) -> str:
    return render(
        Template.FLOW_SUMMARY,
        items=collected_items(flow),
        question=confirm_step.label,
    )


def build_start_message(definition: FlowDefinition, flow: ActiveFlow) -> str:
    """
    Flow introduction. Lists what was understood from the triggering
    message, then asks the current step (or shows the summary when the
    pre-filled prefix already reaches the confirm step).
    """
    step = flow.current_step
    if step is not None and step.type == "confirm":
        prompt = build_summary(flow, step)
    elif step is not None:
        prompt = build_step_prompt(step)
    else:
        prompt = ""

    return render(
        Template.FLOW_START,
        description=definition.description,
        understood=collected_items(flow),
        prompt=prompt,
    )


def build_completion_message(action: str, data: Dict[str, str], steps: List[FlowStep]) -> str:
    """Success message for a flow's executed action."""
    labels = dict(data)
    labels.update(
        {step.field: step.option_label(data[step.field]) for step in steps if step.field in data}
    )
    return render(Template.FLOW_COMPLETED, action=action, data=data, labels=labels)
