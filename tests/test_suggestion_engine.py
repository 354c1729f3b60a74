"""Tests for step chips, contextual suggestions and the permission filter."""

from datetime import date

import pytest

from memora_assistant.context.provider import AllowAllPolicy, RolePermissionPolicy
from memora_assistant.data.flow_definitions import HARDCODED_FLOWS
from memora_assistant.data.suggestions import CONTEXTUAL_SUGGESTIONS, WELCOME_SUGGESTIONS
from memora_assistant.schemas.intent import IntentCategory
from memora_assistant.schemas.results import Suggestion
from memora_assistant.state.models import ActiveFlow
from memora_assistant.suggestions.engine import SuggestionEngine, dedupe


@pytest.fixture
def suggestions():
    return SuggestionEngine(RolePermissionPolicy())


def _task_flow_at(index: int) -> ActiveFlow:
    return ActiveFlow(action="create_task", steps=list(HARDCODED_FLOWS["create_task"].steps),
                      current_step_index=index)


def _ids(items):
    return [s.id for s in items]


class TestStepSuggestions:
    def test_select_options_become_chips(self, suggestions):
        chips = suggestions.step_suggestions(_task_flow_at(2))
        assert [c.query for c in chips] == ["Haute", "Moyenne", "Basse"]
        assert all(c.category == IntentCategory.TASK for c in chips)

    def test_optional_date_step(self, suggestions):
        chips = suggestions.step_suggestions(_task_flow_at(5), today=date(2026, 3, 9))
        assert [(c.label, c.query) for c in chips] == [
            ("Aujourd'hui", "2026-03-09"),
            ("Demain", "2026-03-10"),
            ("Semaine prochaine", "2026-03-16"),
            ("Passer", ""),
        ]

    def test_confirm_step(self, suggestions):
        assert [c.query for c in suggestions.step_suggestions(_task_flow_at(6))] == ["oui", "non"]

    def test_required_text_step_has_no_chips(self, suggestions):
        assert suggestions.step_suggestions(_task_flow_at(0)) == []

    def test_ready_flow_has_no_chips(self, suggestions):
        assert suggestions.step_suggestions(_task_flow_at(7)) == []


class TestContextual:
    def test_dashboard(self, suggestions, context):
        assert suggestions.contextual(context) == CONTEXTUAL_SUGGESTIONS["dashboard"]

    def test_sub_page_wins_over_hub(self, suggestions, make_context):
        result = suggestions.contextual(make_context(current_page="/hub/g1/meetings"))
        assert result == CONTEXTUAL_SUGGESTIONS["meeting"]

    def test_module_without_entry_falls_back_to_welcome(self, suggestions, make_context):
        assert suggestions.contextual(make_context(current_page="/profile")) == WELCOME_SUGGESTIONS

    def test_follow_ups_add_help(self, suggestions, context):
        assert _ids(suggestions.follow_ups("task", context)) == ["qa-create-task", "fu-view-tasks", "fu-help"]

    def test_follow_ups_unknown_category(self, suggestions, context):
        assert suggestions.follow_ups(IntentCategory.GREETING, context) == CONTEXTUAL_SUGGESTIONS["dashboard"]

    def test_flow_completion(self, suggestions, context):
        assert _ids(suggestions.flow_completion("create_task", context)) == [
            "fc-list-tasks", "fc-another-task", "fc-go-tasks",
        ]

    def test_welcome_mixes_contextual_and_general(self, suggestions, context):
        result = suggestions.welcome(context)
        assert len(result) == 6
        assert _ids(result)[:4] == _ids(CONTEXTUAL_SUGGESTIONS["dashboard"])
        assert "sug-list-tasks" not in _ids(result)


class TestPermissionFilter:
    def test_action_for(self, suggestions):
        def make(query):
            return Suggestion(id="x", label="x", query=query, category=IntentCategory.HELP)

        assert suggestions.action_for(make("/tache Rapport")) == "create_task"
        assert suggestions.action_for(make("/aide")) is None
        assert suggestions.action_for(make("Bonjour")) == "greet"
        assert suggestions.action_for(make("xyzzy")) is None

    def test_explicit_permissions(self, suggestions, make_context):
        context = make_context(permissions=frozenset({"list_tasks"}))
        assert _ids(suggestions.contextual(context)) == ["ctx-recent-tasks"]

    def test_no_role_keeps_only_neutral_suggestions(self, suggestions, make_context):
        context = make_context(current_user_role=None)
        assert suggestions.flow_completion("create_task", context) == []

    def test_allow_all_policy(self, make_context):
        engine = SuggestionEngine(AllowAllPolicy())
        context = make_context(current_user_role=None)
        assert engine.contextual(context) == CONTEXTUAL_SUGGESTIONS["dashboard"]


class TestAutocomplete:
    def test_commands(self, suggestions, context):
        assert [s.label for s in suggestions.autocomplete("/cl", context)] == ["/clear"]

    def test_commands_are_filtered(self, suggestions, make_context):
        guest = make_context(current_user_role="Guest")
        assert suggestions.autocomplete("/ta", guest) == []

    def test_too_short(self, suggestions, context):
        assert suggestions.autocomplete("r", context) == []

    def test_catalogue_match(self, suggestions, context):
        result = suggestions.autocomplete("reun", context)
        assert 0 < len(result) <= 6
        assert len(set(_ids(result))) == len(result)
        assert all("reun" in (s.label + s.query + (s.description or "")).lower() for s in result)

    def test_dedupe_by_query(self):
        a = Suggestion(id="a", label="A", query="Mes taches", category=IntentCategory.TASK)
        b = Suggestion(id="b", label="B", query="mes  TACHES", category=IntentCategory.TASK)
        assert dedupe([a, b, a]) == [a]
