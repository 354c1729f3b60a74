from typing import FrozenSet, Optional

from pydantic import BaseModel, ConfigDict


class AssistantContext(BaseModel):
    """
    Snapshot of the host application supplied on every turn.
    Read-only to the engine.

    `permissions`, when set, is the explicit set of IntentAction values the
    user may invoke and takes precedence over the role tables.
    """
    model_config = ConfigDict(frozen=True)

    current_page: str = "/"
    current_group_id: Optional[str] = None
    current_group_name: Optional[str] = None
    current_user_id: Optional[str] = None
    current_user_name: Optional[str] = None
    current_user_role: Optional[str] = None
    admin_mode: bool = False
    active_project_id: Optional[str] = None
    active_project_name: Optional[str] = None
    permissions: Optional[FrozenSet[str]] = None
