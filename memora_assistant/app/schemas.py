"""
API Layer - Request/Response Schemas

Pydantic models for API request and response validation.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from ..schemas.context import AssistantContext
from ..schemas.results import ResponseKind, Suggestion
from ..state.models import ActiveFlow, ChatMessage


class CreateSessionRequest(BaseModel):
    context: Optional[AssistantContext] = None


class CreateSessionResponse(BaseModel):
    session_id: str
    welcome: ChatMessage
    suggestions: List[Suggestion] = Field(default_factory=list)


class UserMessage(BaseModel):
    text: str
    context: Optional[AssistantContext] = None


class FlowView(BaseModel):
    """
    Public view of an ActiveFlow. Steps carry validation callables, so the
    flow itself is never serialized; only the current question is exposed.
    """
    id: str
    action: str
    current_step_index: int
    total_steps: int
    collected_data: Dict[str, str]
    step_label: Optional[str] = None
    step_type: Optional[str] = None
    step_options: List[str] = Field(default_factory=list)

    @classmethod
    def from_flow(cls, flow: Optional[ActiveFlow]) -> Optional["FlowView"]:
        if flow is None:
            return None
        step = flow.current_step
        return cls(
            id=flow.id,
            action=flow.action,
            current_step_index=flow.current_step_index,
            total_steps=len(flow.steps),
            collected_data=dict(flow.collected_data),
            step_label=step.label if step else None,
            step_type=step.type if step else None,
            step_options=[opt.label for opt in step.options] if step else [],
        )


class ChatResponse(BaseModel):
    kind: ResponseKind
    message: ChatMessage
    suggestions: List[Suggestion] = Field(default_factory=list)
    flow: Optional[FlowView] = None
    navigate_to: Optional[str] = None
    side_effects: Dict[str, Any] = Field(default_factory=dict)


class SessionRead(BaseModel):
    session_id: str
    history: List[ChatMessage]
    active_flow: Optional[FlowView] = None
    updated_at: datetime


class SuggestionList(BaseModel):
    suggestions: List[Suggestion]
