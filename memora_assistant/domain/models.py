"""
Domain Layer - Static Flow Definitions

This module defines the static structure of the guided flows the assistant
can run. A FlowDefinition is a registered, ordered list of FlowSteps (slots)
collected one user turn at a time before an action is executed.
"""

from dataclasses import dataclass, field
from typing import Callable, List, Literal, Optional

"""
StepType classifies how a step's input is read:
- text: Free text, stored trimmed
- textarea: Longer free text, same handling as text
- select: One of a fixed list of options (1-based index, label or value)
- date: Free text expected to be a date, suggestions offer shortcuts
- confirm: Final yes/no gate before the action is executed
"""
StepType = Literal["text", "textarea", "select", "date", "confirm"]

# Returns an error message, or None when the value is acceptable
Validator = Callable[[str], Optional[str]]

CONFIRM_FIELD = "_confirm"


@dataclass(frozen=True)
class FlowOption:
    """
    Fixed choice for a select step.

    Attributes:
        value: Canonical value stored in collected data.
        label: Human-readable label shown in prompts and summaries.
    """
    value: str
    label: str


@dataclass(frozen=True)
class FlowStep:
    """
    One slot to fill within a flow.

    Attributes:
        id: Unique identifier within the flow.
        field: Key under which the value is stored in collected data.
        label: Question asked to the user.
        type: StepType
        required: Whether an empty answer is rejected.
        options: Valid choices for select steps.
        placeholder: Example value shown by the presentation layer.
        validation: Optional Validator run on the trimmed, non-empty input.
        entity: Intent entity key that may pre-fill this step when the flow
            starts. Defaults to `field`.
    """
    id: str
    field: str
    label: str
    type: StepType
    required: bool = True
    options: List[FlowOption] = field(default_factory=list)
    placeholder: Optional[str] = None
    validation: Optional[Validator] = None
    entity: Optional[str] = None

    @property
    def entity_key(self) -> str:
        return self.entity or self.field

    @property
    def short_label(self) -> str:
        """Label without the trailing question or parenthetical, for summaries."""
        label = self.label.split("?", 1)[0]
        if label.rstrip().endswith(")") and "(" in label:
            label = label[: label.rindex("(")]
        return label.strip().strip("*").strip()

    def option_label(self, value: str) -> str:
        for opt in self.options:
            if opt.value == value:
                return opt.label
        return value


@dataclass(frozen=True)
class FlowDefinition:
    """
    Registered multi-turn dialogue template for one action.

    Attributes:
        id: Unique identifier of the definition.
        action: IntentAction value this flow collects parameters for.
        title: Short human-readable title.
        description: Introduction sentence shown when the flow starts.
        steps: Ordered steps; at most one confirm step, conventionally last.
    """
    id: str
    action: str
    title: str
    description: str
    steps: List[FlowStep] = field(default_factory=list)
