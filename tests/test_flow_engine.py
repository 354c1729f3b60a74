"""Tests for the guided flow state machine."""

import pytest

from memora_assistant.config import settings
from memora_assistant.data.flow_definitions import HARDCODED_FLOWS
from memora_assistant.domain.models import CONFIRM_FIELD, FlowDefinition, FlowOption, FlowStep
from memora_assistant.execution.engine import FlowEngine, StateMachineTransition, strip_confirmation
from memora_assistant.state.models import ActiveFlow

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _flow_at(definition: FlowDefinition, index: int, data=None) -> ActiveFlow:
    return ActiveFlow(
        action=definition.action,
        steps=list(definition.steps),
        current_step_index=index,
        collected_data=dict(data or {}),
    )


def _valid_answer(step: FlowStep) -> str:
    if step.type == "confirm":
        return "oui"
    if step.type == "select":
        return "1"
    if step.type == "date":
        return "2026-03-10"
    if step.field == "time":
        return "14:00"
    return "Une valeur suffisamment longue"


PRIORITY_INDEX = 2  # create_task: title, description, priority, ...


# ---------------------------------------------------------------------------
# Flow start and pre-fill
# ---------------------------------------------------------------------------


class TestStartFlow:
    def test_without_entities_starts_at_first_step(self, engine, absence_flow_definition):
        turn = engine.start_flow(absence_flow_definition, {})
        assert turn.transition == StateMachineTransition.START
        assert turn.flow.current_step_index == 0
        assert turn.flow.collected_data == {}
        assert "Date de debut" in turn.message

    def test_prefix_is_prefilled(self, engine, task_flow_definition):
        turn = engine.start_flow(task_flow_definition, {"name": "Rapport mensuel"})
        assert turn.flow.current_step_index == 1
        assert turn.flow.collected_data == {"title": "Rapport mensuel"}
        assert "J'ai deja compris" in turn.message

    def test_longer_prefix_canonicalises_select(self, engine, task_flow_definition):
        entities = {"name": "Rapport", "description": "Chiffres de mars", "priority": "haute"}
        turn = engine.start_flow(task_flow_definition, entities)
        assert turn.flow.current_step_index == 3
        assert turn.flow.collected_data == {
            "title": "Rapport", "description": "Chiffres de mars", "priority": "Haute",
        }

    def test_later_entities_after_a_gap_are_discarded(self, engine, task_flow_definition):
        turn = engine.start_flow(task_flow_definition, {"priority": "Haute", "date": "2026-03-15"})
        assert turn.flow.current_step_index == 0
        assert turn.flow.collected_data == {}

    def test_invalid_entity_stops_prefill(self, engine, task_flow_definition):
        turn = engine.start_flow(task_flow_definition, {"name": "ab"})
        assert turn.flow.current_step_index == 0

    def test_prefill_up_to_confirm_shows_summary(self, engine, absence_flow_definition):
        entities = {
            "date": "2026-03-10", "end_date": "2026-03-14",
            "absence_type": "rtt", "reason": "Repos",
        }
        turn = engine.start_flow(absence_flow_definition, entities)
        assert turn.transition == StateMachineTransition.START
        assert turn.flow.current_step.type == "confirm"
        assert "Voici un recapitulatif" in turn.message

    def test_fully_prefilled_flow_without_confirm_completes(self, engine):
        definition = FlowDefinition(
            id="flow-note", action="create_note", title="Note", description="Une note.",
            steps=[FlowStep(id="note-text", field="text", label="Texte ?", type="text")],
        )
        turn = engine.start_flow(definition, {"text": "Bonjour"})
        assert turn.transition == StateMachineTransition.COMPLETE
        assert turn.flow.is_ready


# ---------------------------------------------------------------------------
# Select steps
# ---------------------------------------------------------------------------


class TestSelectStep:
    @pytest.mark.parametrize("answer,expected", [
        ("1", "Haute"), ("2", "Moyenne"), ("3", "Basse"),
        ("Haute", "Haute"), ("moyenne", "Moyenne"), ("BASSE", "Basse"),
    ])
    def test_index_or_label_resolves_to_value(self, engine, task_flow_definition, answer, expected):
        flow = _flow_at(task_flow_definition, PRIORITY_INDEX, {"title": "Rapport", "description": ""})
        turn = engine.handle_step(flow, answer)
        assert turn.transition == StateMachineTransition.ADVANCE
        assert turn.flow.current_step_index == PRIORITY_INDEX + 1
        assert turn.flow.collected_data["priority"] == expected

    def test_option_value_is_accepted(self, engine):
        step = FlowStep(
            id="status", field="status", label="Statut ?", type="select",
            options=[FlowOption(value="in_progress", label="En cours")],
        )
        flow = ActiveFlow(action="create_project", steps=[step])
        turn = engine.handle_step(flow, "IN_PROGRESS")
        assert turn.flow.collected_data == {"status": "in_progress"}

    @pytest.mark.parametrize("answer", ["4", "0", "urgent", "²"])
    def test_no_match_reprompts_with_options(self, engine, task_flow_definition, answer):
        flow = _flow_at(task_flow_definition, PRIORITY_INDEX, {"title": "Rapport", "description": ""})
        turn = engine.handle_step(flow, answer)
        assert turn.transition == StateMachineTransition.HOLD
        assert turn.flow.current_step_index == PRIORITY_INDEX
        assert "1. Haute\n2. Moyenne\n3. Basse" in turn.message

    def test_optional_select_keeps_free_text(self, engine):
        step = FlowStep(
            id="tag", field="tag", label="Etiquette ?", type="select", required=False,
            options=[FlowOption(value="a", label="A"), FlowOption(value="b", label="B")],
        )
        turn = engine.handle_step(ActiveFlow(action="create_note", steps=[step, step]), "  zzz ")
        assert turn.transition == StateMachineTransition.ADVANCE
        assert turn.flow.current_step_index == 1
        assert turn.flow.collected_data == {"tag": "zzz"}

    def test_validator_sees_the_canonical_value(self, engine):
        seen = []

        def refuse(value):
            seen.append(value)
            return "Interdit"

        step = FlowStep(
            id="tag", field="tag", label="Etiquette ?", type="select", validation=refuse,
            options=[FlowOption(value="a", label="A"), FlowOption(value="b", label="B")],
        )
        flow = ActiveFlow(action="create_note", steps=[step])
        turn = engine.handle_step(flow, "1")
        assert turn.transition == StateMachineTransition.HOLD
        assert turn.flow is flow
        assert "Interdit. Veuillez reessayer." in turn.message
        assert seen == ["a"]


# ---------------------------------------------------------------------------
# Empty input and validation
# ---------------------------------------------------------------------------


class TestEmptyAndInvalidInput:
    def test_empty_optional_stores_empty_string(self, engine, task_flow_definition):
        flow = _flow_at(task_flow_definition, 1, {"title": "Rapport"})
        turn = engine.handle_step(flow, "")
        assert turn.transition == StateMachineTransition.ADVANCE
        assert turn.flow.current_step_index == 2
        assert turn.flow.collected_data["description"] == ""

    @pytest.mark.parametrize("answer", ["", "   "])
    def test_empty_required_reprompts_same_step(self, engine, task_flow_definition, answer):
        flow = _flow_at(task_flow_definition, 0)
        turn = engine.handle_step(flow, answer)
        assert turn.transition == StateMachineTransition.HOLD
        assert turn.flow.current_step_index == 0
        assert "Ce champ est requis" in turn.message
        assert task_flow_definition.steps[0].label in turn.message

    def test_validation_error_is_appended(self, engine, task_flow_definition):
        turn = engine.handle_step(_flow_at(task_flow_definition, 0), "ab")
        assert turn.transition == StateMachineTransition.HOLD
        assert "Minimum 3 caracteres. Veuillez reessayer." in turn.message

    def test_invalid_date(self, engine, absence_flow_definition):
        turn = engine.handle_step(_flow_at(absence_flow_definition, 0), "15/03/2026")
        assert turn.transition == StateMachineTransition.HOLD
        assert "Format de date invalide" in turn.message

    def test_value_is_trimmed(self, engine, task_flow_definition):
        turn = engine.handle_step(_flow_at(task_flow_definition, 0), "  Rapport mensuel  ")
        assert turn.flow.collected_data["title"] == "Rapport mensuel"

    def test_input_flow_is_never_mutated(self, engine, task_flow_definition):
        flow = _flow_at(task_flow_definition, 0)
        engine.handle_step(flow, "Rapport mensuel")
        assert flow.current_step_index == 0
        assert flow.collected_data == {}


# ---------------------------------------------------------------------------
# Confirm step
# ---------------------------------------------------------------------------


class TestConfirmStep:
    @pytest.fixture
    def confirming(self, absence_flow_definition):
        data = {"start_date": "2026-03-10", "end_date": "2026-03-14", "type": "rtt", "reason": ""}
        return _flow_at(absence_flow_definition, 4, data)

    @pytest.mark.parametrize("word", settings.CANCEL_WORDS)
    def test_cancel_words_end_the_flow(self, engine, confirming, word):
        turn = engine.handle_step(confirming, word.upper())
        assert turn.transition == StateMachineTransition.CANCEL
        assert turn.flow is None

    @pytest.mark.parametrize("word", settings.CONFIRM_WORDS)
    def test_confirm_words_complete_the_flow(self, engine, confirming, word):
        turn = engine.handle_step(confirming, word.capitalize())
        assert turn.transition == StateMachineTransition.COMPLETE
        assert turn.flow.is_ready

    def test_substring_match(self, engine, confirming):
        assert engine.handle_step(confirming, "Oui, vas-y").transition == StateMachineTransition.COMPLETE

    def test_cancellation_wins(self, engine, confirming):
        assert engine.handle_step(confirming, "ok non").transition == StateMachineTransition.CANCEL

    def test_neither_reprompts(self, engine, confirming):
        turn = engine.handle_step(confirming, "peut-etre")
        assert turn.transition == StateMachineTransition.HOLD
        assert turn.flow is confirming
        assert "Confirmer la demande d'absence ?" in turn.message

    def test_custom_vocabularies(self, absence_flow_definition):
        engine = FlowEngine(confirm_words=["si"], cancel_words=["nein"])
        flow = _flow_at(absence_flow_definition, 4, {"start_date": "2026-03-10"})
        assert engine.handle_step(flow, "Si").transition == StateMachineTransition.COMPLETE
        assert engine.handle_step(flow, "Nein").transition == StateMachineTransition.CANCEL
        assert engine.handle_step(flow, "oui").transition == StateMachineTransition.HOLD


# ---------------------------------------------------------------------------
# Summary and termination
# ---------------------------------------------------------------------------


class TestSummaryAndTermination:
    def test_summary_uses_short_labels_and_option_labels(self, engine, absence_flow_definition):
        data = {"start_date": "2026-03-10", "end_date": "2026-03-14", "type": "rtt"}
        turn = engine.handle_step(_flow_at(absence_flow_definition, 3, data), "")
        assert turn.flow.current_step.type == "confirm"
        assert "- Date de debut : **2026-03-10**" in turn.message
        assert "- Quel type d'absence : **RTT**" in turn.message
        assert "Motif" not in turn.message

    def test_last_step_without_confirm_completes(self, engine):
        step = FlowStep(id="a", field="a", label="A ?", type="text")
        turn = engine.handle_step(ActiveFlow(action="create_note", steps=[step]), "valeur")
        assert turn.transition == StateMachineTransition.COMPLETE
        assert turn.flow.collected_data == {"a": "valeur"}

    @pytest.mark.parametrize("action", sorted(HARDCODED_FLOWS))
    def test_valid_answers_terminate_within_bound(self, engine, action):
        definition = HARDCODED_FLOWS[action]
        turn = engine.start_flow(definition, {})
        turns = 0
        while turn.transition != StateMachineTransition.COMPLETE:
            step = turn.flow.current_step
            turn = engine.handle_step(turn.flow, _valid_answer(step))
            turns += 1
            assert turns <= len(definition.steps) + 1
        assert set(turn.flow.collected_data) <= {s.field for s in definition.steps}

    def test_strip_confirmation(self):
        assert strip_confirmation({"title": "x", CONFIRM_FIELD: "oui"}) == {"title": "x"}
