"""Tests for slash-command parsing and the command registry."""

import pytest

from memora_assistant.intent.commands import (
    SMART_COMMANDS,
    CommandOutcome,
    CommandRegistry,
    is_smart_command,
    parse_smart_command,
)
from memora_assistant.schemas.intent import IntentAction


@pytest.fixture
def registry():
    return CommandRegistry()


class TestParsing:
    def test_prefix_detection(self):
        assert is_smart_command("/aide")
        assert is_smart_command("   /clear")
        assert not is_smart_command("aide")

    def test_name_is_lowercased_and_args_keep_case(self):
        assert parse_smart_command("/TACHE Corriger le Login") == ("tache", "Corriger le Login")

    def test_no_args(self):
        assert parse_smart_command("/stats") == ("stats", "")


class TestLookup:
    def test_find_by_alias(self, registry):
        assert registry.find("t").command == "tache"
        assert registry.find("?").command == "aide"
        assert registry.find("BELL").command == "notifs"

    def test_resolve_ignores_plain_text(self, registry):
        assert registry.resolve("tache") is None
        assert registry.resolve("/inconnue") is None
        assert registry.resolve("/go projets").command == "aller"

    def test_system_commands_have_no_action(self, registry):
        for name in ("aide", "clear", "recap", "raccourcis"):
            assert registry.find(name).action is None


class TestExecution:
    def test_task_delegates_quick_creation(self, registry, context):
        result = registry.execute("/tache Corriger le bug", context)
        assert result.delegate is not None
        assert result.delegate.action == IntentAction.CREATE_TASK
        assert result.delegate.entities == {
            "title": "Corriger le bug", "priority": "Moyenne", "status": "A faire",
        }

    def test_task_without_title_shows_usage(self, registry, context):
        result = registry.execute("/tache", context)
        assert result.delegate is None
        assert "Usage" in result.message

    def test_clear(self, registry, context):
        result = registry.execute("/clear", context)
        assert result.kind == CommandOutcome.CLEAR_CONVERSATION
        assert result.message == "Conversation effacee. Comment puis-je vous aider ?"

    def test_unknown_command_points_to_help(self, registry, context):
        result = registry.execute("/foo bar", context)
        assert "/foo" in result.message
        assert [s.query for s in result.suggestions] == ["/aide"]

    def test_meeting_offers_flow_chip(self, registry, context):
        result = registry.execute("/reunion Standup", context)
        assert result.delegate is None
        assert result.suggestions[0].query == 'Planifier une reunion "Standup"'

    def test_export_validates_format(self, registry, context):
        assert "non supporte" in registry.execute("/export docx", context).message
        result = registry.execute("/export", context)
        assert result.delegate.action == IntentAction.EXPORT_DATA
        assert result.delegate.entities == {"format": "pdf"}

    def test_theme(self, registry, context):
        assert registry.execute("/theme sombre", context).delegate.entities == {"theme": "dark"}
        assert registry.execute("/theme bleu", context).delegate is None

    def test_help_lists_every_command(self, registry, context):
        message = registry.execute("/aide", context).message
        for cmd in SMART_COMMANDS:
            assert f"/{cmd.command}" in message


class TestAutocomplete:
    def test_prefix_matches_name_or_alias(self, registry):
        labels = [s.label for s in registry.autocomplete("/t")]
        assert labels == ["/tache", "/theme", "/equipe"]

    def test_suggestion_shape(self, registry):
        suggestion = registry.autocomplete("/sta")[0]
        assert suggestion.id == "cmd-stats"
        assert suggestion.query == "/stats "

    def test_bare_slash_is_capped(self, registry):
        assert len(registry.autocomplete("/")) == 6
