"""Tests for the action executor and the in-memory domain operations."""

import pytest

from memora_assistant.data.flow_definitions import HARDCODED_FLOWS
from memora_assistant.data.responses import DOMAIN_FAILURE, UNKNOWN_INTENT, UNSUPPORTED_ACTION
from memora_assistant.domain.models import CONFIRM_FIELD
from memora_assistant.execution.executor import ActionExecutor
from memora_assistant.schemas.intent import DetectedIntent, IntentAction, IntentCategory
from memora_assistant.services.exceptions import DomainOperationError
from memora_assistant.services.operations import InMemoryDomainOperations, OperationOutcome
from memora_assistant.state.models import ActiveFlow


def _intent(action: IntentAction, category: IntentCategory, raw: str = "", **entities) -> DetectedIntent:
    return DetectedIntent(action=action, category=category, entities=entities, confidence=1.0, raw_query=raw)


class FailingOperations(InMemoryDomainOperations):
    """Every creation fails; listing tasks reports a failed outcome."""

    async def create_task(self, context, params):
        raise DomainOperationError("Service des taches indisponible.")

    async def list_tasks(self, context, params):
        return OperationOutcome(success=False)


class TestFlowExecution:
    async def test_completed_absence_flow_creates_record(self, executor, operations, context):
        definition = HARDCODED_FLOWS["request_absence"]
        flow = ActiveFlow(
            action="request_absence",
            steps=list(definition.steps),
            current_step_index=len(definition.steps),
            collected_data={
                "start_date": "2026-03-10", "end_date": "2026-03-14",
                "type": "rtt", "reason": "", CONFIRM_FIELD: "oui",
            },
        )
        result = await executor.execute_flow(flow, context)

        assert result.success
        assert "Votre demande d'absence a ete soumise" in result.message
        assert "- Type : RTT" in result.message
        created = result.data["created"]
        assert created["action"] == "request_absence"
        assert created["record"]["status"] == "pending"
        assert CONFIRM_FIELD not in created["record"]
        assert len(operations.records("absences")) == 1
        assert result.attachment.type == "card"
        assert {f.label for f in result.attachment.fields} == {"Date de debut", "Date de fin", "Quel type d'absence"}

    async def test_end_before_start_is_a_domain_failure(self, executor, operations, context):
        result = await executor.execute_operation(
            "request_absence",
            {"start_date": "2026-03-14", "end_date": "2026-03-10", "type": "rtt"},
            context,
        )
        assert not result.success
        assert result.message == "La date de fin precede la date de debut."
        assert operations.records("absences") == []

    async def test_raised_domain_error_becomes_failure(self, context):
        executor = ActionExecutor(FailingOperations())
        result = await executor.execute_operation("create_task", {"title": "Rapport"}, context)
        assert not result.success
        assert result.message == "Service des taches indisponible."

    async def test_quick_creation_without_steps(self, executor, operations, context):
        result = await executor.execute_operation(
            "create_project", {"name": "Refonte", "status": "todo"}, context
        )
        assert result.success
        assert 'Le projet **"Refonte"** a ete cree' in result.message
        assert operations.records("projects")[0]["group_id"] == "g1"

    async def test_unknown_creation_action(self, executor, context):
        result = await executor.execute_operation("create_spaceship", {}, context)
        assert not result.success
        assert result.message == UNSUPPORTED_ACTION


class TestImmediateActions:
    async def test_greeting_is_stable_per_text(self, executor, context):
        intent = _intent(IntentAction.GREET, IntentCategory.GREETING, "Bonjour")
        first = await executor.execute_intent(intent, context)
        second = await executor.execute_intent(intent, context)
        assert first.success
        assert first.message == second.message

    async def test_help_renders_sections(self, executor, context):
        result = await executor.execute_intent(_intent(IntentAction.SHOW_HELP, IntentCategory.HELP), context)
        assert "**Taches**" in result.message
        assert "/aide" in result.message

    async def test_navigation_to_group_page(self, executor, context):
        intent = _intent(IntentAction.NAVIGATE_TO, IntentCategory.NAVIGATION, target="projets")
        result = await executor.execute_intent(intent, context)
        assert result.success
        assert result.navigate_to == "/hub/g1/projects"
        assert result.follow_up_suggestions[0].id == "ctx-new-project"

    async def test_navigation_uses_default_group(self, executor, make_context):
        intent = _intent(IntentAction.NAVIGATE_TO, IntentCategory.NAVIGATION, target="taches")
        result = await executor.execute_intent(intent, make_context(current_group_id=None))
        assert result.navigate_to == "/hub/default/tasks"

    async def test_navigation_falls_back_to_raw_query(self, executor, context):
        intent = _intent(IntentAction.NAVIGATE_TO, IntentCategory.NAVIGATION, "statistiques")
        result = await executor.execute_intent(intent, context)
        assert result.navigate_to == "/stats"

    async def test_unknown_page_lists_links(self, executor, context):
        intent = _intent(IntentAction.NAVIGATE_TO, IntentCategory.NAVIGATION, target="zzz")
        result = await executor.execute_intent(intent, context)
        assert not result.success
        assert result.navigate_to is None
        assert result.attachment.type == "navigation"
        assert result.attachment.links

    async def test_list_tasks_filtered_by_status(self, context):
        operations = InMemoryDomainOperations(seed={"tasks": [
            {"title": "A", "status": "En cours", "group_id": "g1"},
            {"title": "B", "status": "A faire", "group_id": "g1"},
            {"title": "C", "status": "En cours", "group_id": "other"},
        ]})
        executor = ActionExecutor(operations)
        intent = _intent(IntentAction.LIST_TASKS, IntentCategory.TASK, status="En cours")
        result = await executor.execute_intent(intent, context)
        assert result.attachment.title == "Taches (En cours)"
        assert [item.label for item in result.attachment.items] == ["A"]

    async def test_list_failure(self, context):
        executor = ActionExecutor(FailingOperations())
        result = await executor.execute_intent(_intent(IntentAction.LIST_TASKS, IntentCategory.TASK), context)
        assert not result.success
        assert result.message == DOMAIN_FAILURE

    async def test_complete_task_by_name(self, context):
        operations = InMemoryDomainOperations(seed={"tasks": [{"title": "Rapport", "status": "A faire"}]})
        executor = ActionExecutor(operations)
        intent = _intent(IntentAction.COMPLETE_TASK, IntentCategory.TASK, name="rapport")
        result = await executor.execute_intent(intent, context)
        assert result.success
        assert operations.records("tasks")[0]["status"] == "Termine"

    async def test_complete_task_needs_a_name(self, executor, context):
        result = await executor.execute_intent(_intent(IntentAction.COMPLETE_TASK, IntentCategory.TASK), context)
        assert not result.success
        assert "guillemets" in result.message

    async def test_cancel_missing_meeting(self, executor, context):
        intent = _intent(IntentAction.CANCEL_MEETING, IntentCategory.MEETING, name="Fantome")
        result = await executor.execute_intent(intent, context)
        assert not result.success
        assert "Fantome" in result.message

    async def test_approve_first_pending_absence(self, context):
        operations = InMemoryDomainOperations(seed={"absences": [
            {"type": "rtt", "status": "approved"},
            {"type": "maladie", "status": "pending"},
        ]})
        executor = ActionExecutor(operations)
        result = await executor.execute_intent(
            _intent(IntentAction.APPROVE_ABSENCE, IntentCategory.ABSENCE), context
        )
        assert result.success
        assert [a["status"] for a in operations.records("absences")] == ["approved", "approved"]

    async def test_reject_without_pending(self, executor, context):
        result = await executor.execute_intent(
            _intent(IntentAction.REJECT_ABSENCE, IntentCategory.ABSENCE), context
        )
        assert not result.success

    async def test_theme_and_admin_toggle_report_side_effects(self, executor, make_context):
        theme = await executor.execute_intent(
            _intent(IntentAction.CHANGE_THEME, IntentCategory.SETTINGS, theme="light"), make_context()
        )
        assert theme.data == {"theme": "light"}
        admin = await executor.execute_intent(
            _intent(IntentAction.TOGGLE_ADMIN_MODE, IntentCategory.SETTINGS), make_context(admin_mode=True)
        )
        assert admin.data == {"admin_mode": False}

    async def test_export_queues_job(self, executor, operations, context):
        result = await executor.execute_intent(
            _intent(IntentAction.EXPORT_DATA, IntentCategory.EXPORT, format="csv"), context
        )
        assert "**CSV**" in result.message
        assert result.data["export"]["format"] == "csv"
        assert len(operations.records("exports")) == 1

    async def test_stats(self, context):
        operations = InMemoryDomainOperations(seed={"tasks": [
            {"title": "A", "status": "Termine"}, {"title": "B", "status": "A faire"},
        ]})
        result = await ActionExecutor(operations).execute_intent(
            _intent(IntentAction.SHOW_STATS, IntentCategory.NAVIGATION), context
        )
        stats = {s.label: s.value for s in result.attachment.stats}
        assert stats["Taches"] == 2
        assert stats["Taches terminees"] == 1

    async def test_search_and_mark_read(self, context):
        operations = InMemoryDomainOperations(seed={
            "projects": [{"name": "Refonte du site"}],
            "notifications": [{"title": "Rappel", "read": False}],
        })
        executor = ActionExecutor(operations)
        search = await executor.execute_intent(
            _intent(IntentAction.SEARCH_GLOBAL, IntentCategory.SEARCH, query="refonte"), context
        )
        assert [item.label for item in search.attachment.items] == ["Refonte du site"]

        await executor.execute_intent(
            _intent(IntentAction.MARK_NOTIFICATIONS_READ, IntentCategory.NOTIFICATION), context
        )
        assert operations.records("notifications")[0]["read"] is True

    @pytest.mark.parametrize("action", [IntentAction.UPDATE_TASK, IntentAction.DELETE_PROJECT])
    async def test_unsupported_actions(self, executor, context, action):
        result = await executor.execute_intent(_intent(action, IntentCategory.TASK), context)
        assert not result.success
        assert result.message == UNSUPPORTED_ACTION

    async def test_unknown_intent(self, executor, context):
        result = await executor.execute_intent(_intent(IntentAction.UNKNOWN, IntentCategory.UNKNOWN), context)
        assert result.message == UNKNOWN_INTENT
        assert result.follow_up_suggestions
