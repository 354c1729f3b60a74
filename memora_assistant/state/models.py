"""
State Layer - Runtime Data Models

This module defines the runtime state threaded through the conversation:
the ActiveFlow (the only cross-turn state of the engine), chat messages,
and the host-side SessionState that keeps at most one ActiveFlow per session.
"""

import uuid
from datetime import datetime, timezone
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from ..domain.models import FlowStep
from ..schemas.attachments import MessageAttachment


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


class ChatMessage(BaseModel):
    """
    One entry of the transcript. Immutable once created.
    """
    id: str = Field(default_factory=lambda: _new_id("msg"))
    role: Literal["user", "assistant", "system"]
    content: str
    timestamp: datetime = Field(default_factory=_utcnow)
    attachment: Optional[MessageAttachment] = None
    is_error: bool = False

    model_config = {"frozen": True}


class ActiveFlow(BaseModel):
    """
    A guided flow in progress.

    The engine never mutates an ActiveFlow: each turn returns either an
    updated copy or None. `current_step_index == len(steps)` means every
    step is answered and the action is ready to execute.
    """
    id: str = Field(default_factory=lambda: _new_id("flow"))
    action: str
    steps: List[FlowStep]
    current_step_index: int = 0
    collected_data: Dict[str, str] = Field(default_factory=dict)
    started_at: datetime = Field(default_factory=_utcnow)

    @property
    def current_step(self) -> Optional[FlowStep]:
        if 0 <= self.current_step_index < len(self.steps):
            return self.steps[self.current_step_index]
        return None

    @property
    def is_ready(self) -> bool:
        return self.current_step_index >= len(self.steps)


class SessionState(BaseModel):
    """
    Host-side slot for a single user session.
    """
    session_id: str
    active_flow: Optional[ActiveFlow] = None
    history: List[ChatMessage] = Field(default_factory=list)
    updated_at: datetime = Field(default_factory=_utcnow)
