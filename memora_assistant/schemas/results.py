"""
Schemas - Turn Results

ActionResult is what the ActionExecutor returns; AssistantResponse is the
uniform envelope every path of the MessageProcessor ends in.
"""
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from ..state.models import ActiveFlow, ChatMessage
from .attachments import MessageAttachment
from .intent import IntentCategory


class Suggestion(BaseModel):
    """
    Clickable shortcut. Choosing it resubmits `query` as the next user turn.
    """
    id: str
    label: str
    icon: str = "sparkles"
    query: str
    category: IntentCategory
    description: Optional[str] = None


class ActionResult(BaseModel):
    success: bool
    message: str
    attachment: Optional[MessageAttachment] = None
    navigate_to: Optional[str] = None
    data: Optional[Dict[str, Any]] = None
    follow_up_suggestions: Optional[List[Suggestion]] = None


class ResponseKind(str, Enum):
    """
    Tags the envelope so control signals never travel in the message content.

    MESSAGE: Displayable assistant reply.
    CLEAR_CONVERSATION: The host must wipe the transcript; `message` is the
        acknowledgment shown after clearing.
    """
    MESSAGE = "message"
    CLEAR_CONVERSATION = "clear_conversation"


class AssistantResponse(BaseModel):
    """
    The host must store `flow` and pass it back on the next turn; `None`
    means no flow is active anymore.
    """
    kind: ResponseKind = ResponseKind.MESSAGE
    message: ChatMessage
    suggestions: List[Suggestion] = Field(default_factory=list)
    flow: Optional[ActiveFlow] = None
    navigate_to: Optional[str] = None
    side_effects: Dict[str, Any] = Field(default_factory=dict)
