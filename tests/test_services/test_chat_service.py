"""Tests for the ChatService: session loading, history and the flow slot."""

import pytest

from memora_assistant.config import settings
from memora_assistant.schemas.results import ResponseKind
from memora_assistant.services.exceptions import MessageTooLongError, SessionNotFoundError


class TestSessionLifecycle:
    def test_create_opens_with_welcome(self, chat_service, context):
        session = chat_service.create_session(context)
        assert len(session.history) == 1
        assert session.history[0].role == "assistant"
        assert "Sophie" in session.history[0].content
        assert chat_service.get_session(session.session_id) is session

    def test_create_without_context(self, chat_service):
        session = chat_service.create_session()
        assert session.history[0].content.startswith("Salut !")

    def test_delete(self, chat_service):
        session = chat_service.create_session()
        assert chat_service.delete_session(session.session_id)
        assert chat_service.get_session(session.session_id) is None
        assert not chat_service.delete_session(session.session_id)


class TestProcessMessage:
    async def test_unknown_session(self, chat_service, context):
        with pytest.raises(SessionNotFoundError):
            await chat_service.process_message("missing", "Bonjour", context)

    async def test_message_too_long(self, chat_service, context):
        session = chat_service.create_session(context)
        with pytest.raises(MessageTooLongError):
            await chat_service.process_message(
                session.session_id, "a" * (settings.MAX_INPUT_LENGTH + 1), context
            )
        assert len(session.history) == 1

    async def test_history_appends_user_and_assistant(self, chat_service, context):
        session = chat_service.create_session(context)
        await chat_service.process_message(session.session_id, "Bonjour", context)
        roles = [m.role for m in chat_service.get_session(session.session_id).history]
        assert roles == ["assistant", "user", "assistant"]

    async def test_history_is_trimmed(self, chat_service, context, monkeypatch):
        monkeypatch.setattr(settings, "MAX_CONVERSATION_HISTORY", 4)
        session = chat_service.create_session(context)
        for text in ["Bonjour", "Salut", "Aide"]:
            await chat_service.process_message(session.session_id, text, context)
        history = chat_service.get_session(session.session_id).history
        assert len(history) == 4
        assert history[0].content == "Salut"

    async def test_active_flow_is_threaded(self, chat_service, operations, context):
        session = chat_service.create_session(context)
        sid = session.session_id

        await chat_service.process_message(sid, 'Creer une tache "Rapport mensuel"', context)
        flow = chat_service.get_session(sid).active_flow
        assert flow.action == "create_task"
        assert flow.current_step_index == 1

        for answer in ["", "Haute", "A faire", "", ""]:
            await chat_service.process_message(sid, answer, context)
        assert chat_service.get_session(sid).active_flow.current_step.type == "confirm"

        response = await chat_service.process_message(sid, "oui", context)
        assert response.side_effects["created"]["record"]["priority"] == "Haute"
        assert chat_service.get_session(sid).active_flow is None
        assert operations.records("tasks")[0]["title"] == "Rapport mensuel"

    async def test_clear_resets_history(self, chat_service, context):
        session = chat_service.create_session(context)
        await chat_service.process_message(session.session_id, "Bonjour", context)
        response = await chat_service.process_message(session.session_id, "/clear", context)
        assert response.kind == ResponseKind.CLEAR_CONVERSATION
        assert chat_service.get_session(session.session_id).history == [response.message]


class TestCancelFlow:
    async def test_cancel_drops_active_flow(self, chat_service, context):
        session = chat_service.create_session(context)
        await chat_service.process_message(session.session_id, "Je veux declarer une absence", context)
        assert session.active_flow is not None

        response = chat_service.cancel_flow(session.session_id, context)
        assert response.flow is None
        stored = chat_service.get_session(session.session_id)
        assert stored.active_flow is None
        assert stored.history[-1] == response.message

    def test_cancel_without_flow_leaves_history(self, chat_service, context):
        session = chat_service.create_session(context)
        chat_service.cancel_flow(session.session_id, context)
        assert len(chat_service.get_session(session.session_id).history) == 1

    def test_cancel_unknown_session(self, chat_service):
        with pytest.raises(SessionNotFoundError):
            chat_service.cancel_flow("missing")
