"""
Domain Operations Interface.

Defines the contract for the host application's domain collaborators: one
coroutine per action the assistant can trigger. The assistant only decides
*that* an operation runs and *with which parameters*; persistence is the
implementation's business.

Implementations report failures either by returning an OperationOutcome
with `success=False` or by raising DomainOperationError. Retries, if any,
belong to the implementation.
"""
import logging
import uuid
from abc import ABC, abstractmethod
from datetime import date
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from ..schemas.attachments import ListItem, StatItem
from ..schemas.context import AssistantContext
from .exceptions import DomainOperationError

logger = logging.getLogger(__name__)

Params = Dict[str, str]


class OperationOutcome(BaseModel):
    """
    Result of one domain operation.

    Attributes:
        success: Whether the operation completed.
        message: Optional user-facing explanation (mostly for failures).
        items: Rows returned by list and search operations.
        record: The created or updated record.
        stats: Indicators returned by the stats operation.
    """
    success: bool = True
    message: Optional[str] = None
    items: List[ListItem] = Field(default_factory=list)
    record: Optional[Dict[str, Any]] = None
    stats: List[StatItem] = Field(default_factory=list)


class DomainOperations(ABC):
    # --- Creation (flow actions) ---

    @abstractmethod
    async def create_task(self, context: AssistantContext, params: Params) -> OperationOutcome:
        pass

    @abstractmethod
    async def create_project(self, context: AssistantContext, params: Params) -> OperationOutcome:
        pass

    @abstractmethod
    async def create_meeting(self, context: AssistantContext, params: Params) -> OperationOutcome:
        pass

    @abstractmethod
    async def request_absence(self, context: AssistantContext, params: Params) -> OperationOutcome:
        pass

    @abstractmethod
    async def create_job_offer(self, context: AssistantContext, params: Params) -> OperationOutcome:
        pass

    @abstractmethod
    async def create_training(self, context: AssistantContext, params: Params) -> OperationOutcome:
        pass

    # --- Listing ---

    @abstractmethod
    async def list_tasks(self, context: AssistantContext, params: Params) -> OperationOutcome:
        """`params` may carry a `status` filter."""
        pass

    @abstractmethod
    async def list_projects(self, context: AssistantContext, params: Params) -> OperationOutcome:
        pass

    @abstractmethod
    async def list_meetings(self, context: AssistantContext, params: Params) -> OperationOutcome:
        pass

    @abstractmethod
    async def list_absences(self, context: AssistantContext, params: Params) -> OperationOutcome:
        pass

    @abstractmethod
    async def list_notifications(self, context: AssistantContext, params: Params) -> OperationOutcome:
        pass

    @abstractmethod
    async def list_users(self, context: AssistantContext, params: Params) -> OperationOutcome:
        """`params` may carry a `name` filter."""
        pass

    @abstractmethod
    async def list_candidates(self, context: AssistantContext, params: Params) -> OperationOutcome:
        pass

    @abstractmethod
    async def list_trainings(self, context: AssistantContext, params: Params) -> OperationOutcome:
        pass

    @abstractmethod
    async def search(self, context: AssistantContext, params: Params) -> OperationOutcome:
        """`params["query"]` is the search text."""
        pass

    # --- Updates ---

    @abstractmethod
    async def complete_task(self, context: AssistantContext, params: Params) -> OperationOutcome:
        """`params["name"]` identifies the task."""
        pass

    @abstractmethod
    async def cancel_meeting(self, context: AssistantContext, params: Params) -> OperationOutcome:
        """`params["name"]` identifies the meeting."""
        pass

    @abstractmethod
    async def approve_absence(self, context: AssistantContext, params: Params) -> OperationOutcome:
        pass

    @abstractmethod
    async def reject_absence(self, context: AssistantContext, params: Params) -> OperationOutcome:
        pass

    @abstractmethod
    async def mark_notifications_read(self, context: AssistantContext, params: Params) -> OperationOutcome:
        pass

    @abstractmethod
    async def export_data(self, context: AssistantContext, params: Params) -> OperationOutcome:
        """`params["format"]` is one of pdf, csv, excel, json."""
        pass

    @abstractmethod
    async def get_stats(self, context: AssistantContext, params: Params) -> OperationOutcome:
        pass


ABSENCE_TYPE_LABELS = {
    "conge_paye": "Conge paye",
    "rtt": "RTT",
    "maladie": "Maladie",
    "autre": "Autre",
}


class InMemoryDomainOperations(DomainOperations):
    """
    Keeps records in per-kind lists for testing/dev purposes. Records are
    scoped by the context's group when one is set.
    """

    KINDS = (
        "tasks", "projects", "meetings", "absences", "job_offers",
        "trainings", "notifications", "users", "candidates", "exports",
    )

    def __init__(self, seed: Optional[Dict[str, List[Dict[str, Any]]]] = None):
        self._store: Dict[str, List[Dict[str, Any]]] = {kind: [] for kind in self.KINDS}
        for kind, records in (seed or {}).items():
            self._store[kind].extend(dict(r, id=r.get("id") or self._new_id(kind)) for r in records)

    def records(self, kind: str) -> List[Dict[str, Any]]:
        """Copy of the stored records of one kind."""
        return [dict(r) for r in self._store[kind]]

    # ==========================================================================
    # Creation
    # ==========================================================================

    async def create_task(self, context, params):
        return self._create(context, "tasks", params, status=params.get("status") or "A faire")

    async def create_project(self, context, params):
        return self._create(context, "projects", params, status=params.get("status") or "todo")

    async def create_meeting(self, context, params):
        return self._create(context, "meetings", params, status="planned")

    async def request_absence(self, context, params):
        start, end = params.get("start_date"), params.get("end_date")
        if start and end and date.fromisoformat(end) < date.fromisoformat(start):
            raise DomainOperationError("La date de fin precede la date de debut.")
        return self._create(
            context, "absences", params, status="pending", requester=context.current_user_name
        )

    async def create_job_offer(self, context, params):
        return self._create(context, "job_offers", params, status="published")

    async def create_training(self, context, params):
        return self._create(context, "trainings", params, status="draft")

    # ==========================================================================
    # Listing
    # ==========================================================================

    async def list_tasks(self, context, params):
        status = params.get("status")
        tasks = [
            t for t in self._scoped(context, "tasks")
            if not status or t.get("status") == status
        ]
        return OperationOutcome(items=[
            ListItem(
                id=t["id"],
                label=t.get("title", ""),
                description=f"Priorite {t['priority']}" if t.get("priority") else None,
                badge=t.get("status"),
                badge_variant="success" if t.get("status") == "Termine" else "info",
                icon="tasks",
            )
            for t in tasks
        ])

    async def list_projects(self, context, params):
        return OperationOutcome(items=[
            ListItem(id=p["id"], label=p.get("name", ""), description=p.get("description") or None,
                     badge=p.get("status"), icon="folder")
            for p in self._scoped(context, "projects")
        ])

    async def list_meetings(self, context, params):
        meetings = [m for m in self._scoped(context, "meetings") if m.get("status") != "cancelled"]
        meetings.sort(key=lambda m: (m.get("date", ""), m.get("time", "")))
        return OperationOutcome(items=[
            ListItem(id=m["id"], label=m.get("title", ""),
                     description=f"{m.get('date', '')} {m.get('time', '')}".strip(), icon="calendar")
            for m in meetings
        ])

    async def list_absences(self, context, params):
        return OperationOutcome(items=[
            ListItem(
                id=a["id"],
                label=ABSENCE_TYPE_LABELS.get(a.get("type", ""), a.get("type", "")),
                description=f"Du {a.get('start_date')} au {a.get('end_date')}",
                badge=a.get("status"),
                badge_variant={"approved": "success", "rejected": "error"}.get(a.get("status"), "warning"),
                icon="calendar",
            )
            for a in self._scoped(context, "absences")
        ])

    async def list_notifications(self, context, params):
        return OperationOutcome(items=[
            ListItem(id=n["id"], label=n.get("title", ""), description=n.get("body"),
                     badge=None if n.get("read") else "Nouveau", icon="bell")
            for n in self._scoped(context, "notifications")
        ])

    async def list_users(self, context, params):
        name = (params.get("name") or "").lower()
        return OperationOutcome(items=[
            ListItem(id=u["id"], label=u.get("name", ""), description=u.get("role"), icon="users")
            for u in self._scoped(context, "users")
            if not name or name in u.get("name", "").lower()
        ])

    async def list_candidates(self, context, params):
        return OperationOutcome(items=[
            ListItem(id=c["id"], label=c.get("name", ""), description=c.get("position"),
                     badge=c.get("stage"), icon="users")
            for c in self._scoped(context, "candidates")
        ])

    async def list_trainings(self, context, params):
        return OperationOutcome(items=[
            ListItem(id=t["id"], label=t.get("title", ""), description=t.get("category"), icon="training")
            for t in self._scoped(context, "trainings")
        ])

    async def search(self, context, params):
        query = (params.get("query") or "").lower()
        if not query:
            return OperationOutcome()
        items = []
        for kind, key, icon in (
            ("tasks", "title", "tasks"),
            ("projects", "name", "folder"),
            ("meetings", "title", "calendar"),
            ("users", "name", "users"),
            ("trainings", "title", "training"),
        ):
            for record in self._scoped(context, kind):
                if query in str(record.get(key, "")).lower():
                    items.append(ListItem(id=record["id"], label=record[key], badge=kind, icon=icon))
        return OperationOutcome(items=items)

    # ==========================================================================
    # Updates
    # ==========================================================================

    async def complete_task(self, context, params):
        task = self._find_by(context, "tasks", "title", params.get("name"))
        if task is None:
            return OperationOutcome(success=False, message=f"Aucune tache nommee \"{params.get('name')}\".")
        task["status"] = "Termine"
        return OperationOutcome(record=dict(task))

    async def cancel_meeting(self, context, params):
        meeting = self._find_by(context, "meetings", "title", params.get("name"))
        if meeting is None:
            return OperationOutcome(success=False, message=f"Aucune reunion nommee \"{params.get('name')}\".")
        meeting["status"] = "cancelled"
        return OperationOutcome(record=dict(meeting))

    async def approve_absence(self, context, params):
        return self._decide_absence(context, "approved")

    async def reject_absence(self, context, params):
        return self._decide_absence(context, "rejected")

    async def mark_notifications_read(self, context, params):
        notifications = self._scoped(context, "notifications")
        for n in notifications:
            n["read"] = True
        return OperationOutcome(record={"count": len(notifications)})

    async def export_data(self, context, params):
        job = {"id": self._new_id("exports"), "format": params.get("format", "pdf"), "status": "queued"}
        self._store["exports"].append(job)
        return OperationOutcome(record=dict(job))

    async def get_stats(self, context, params):
        tasks = self._scoped(context, "tasks")
        done = sum(1 for t in tasks if t.get("status") == "Termine")
        return OperationOutcome(stats=[
            StatItem(label="Taches", value=len(tasks)),
            StatItem(label="Taches terminees", value=done),
            StatItem(label="Projets", value=len(self._scoped(context, "projects"))),
            StatItem(label="Reunions", value=len(self._scoped(context, "meetings"))),
            StatItem(
                label="Absences en attente",
                value=sum(1 for a in self._scoped(context, "absences") if a.get("status") == "pending"),
            ),
        ])

    # ==========================================================================
    # Helpers
    # ==========================================================================

    def _create(self, context: AssistantContext, kind: str, params: Params, **extra) -> OperationOutcome:
        record: Dict[str, Any] = {**params, **extra}
        record["id"] = self._new_id(kind)
        record["group_id"] = context.current_group_id
        record["created_by"] = context.current_user_id
        self._store[kind].append(record)
        logger.debug(f"Created {kind} record {record['id']}")
        return OperationOutcome(record=dict(record))

    def _scoped(self, context: AssistantContext, kind: str) -> List[Dict[str, Any]]:
        group = context.current_group_id
        return [
            r for r in self._store[kind]
            if group is None or r.get("group_id") in (None, group)
        ]

    def _find_by(self, context: AssistantContext, kind: str, key: str, value: Optional[str]):
        if not value:
            return None
        wanted = value.strip().lower()
        return next(
            (r for r in self._scoped(context, kind) if str(r.get(key, "")).lower() == wanted),
            None,
        )

    def _decide_absence(self, context: AssistantContext, status: str) -> OperationOutcome:
        pending = [a for a in self._scoped(context, "absences") if a.get("status") == "pending"]
        if not pending:
            return OperationOutcome(success=False, message="Aucune demande d'absence en attente.")
        absence = pending[0]
        absence["status"] = status
        return OperationOutcome(record=dict(absence))

    @staticmethod
    def _new_id(kind: str) -> str:
        return f"{kind[:-1] if kind.endswith('s') else kind}-{uuid.uuid4().hex[:8]}"
