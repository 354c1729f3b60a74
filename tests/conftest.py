"""Shared fixtures: contexts, in-memory collaborators and a wired processor.

The thinking delay is disabled everywhere so tests never sleep.
"""

import pytest

from memora_assistant.context.provider import RolePermissionPolicy
from memora_assistant.data.flow_definitions import HARDCODED_FLOWS
from memora_assistant.execution.engine import FlowEngine
from memora_assistant.execution.executor import ActionExecutor
from memora_assistant.repositories.flow import StaticFlowRepository
from memora_assistant.repositories.session import InMemorySessionRepository
from memora_assistant.schemas.context import AssistantContext
from memora_assistant.services.chat import ChatService
from memora_assistant.services.operations import InMemoryDomainOperations
from memora_assistant.services.processor import MessageProcessor


@pytest.fixture
def make_context():
    """Factory for AssistantContext snapshots; Owner on the group dashboard by default."""

    def _make(**overrides) -> AssistantContext:
        defaults = dict(
            current_page="/hub/g1",
            current_group_id="g1",
            current_group_name="Alpha",
            current_user_id="u1",
            current_user_name="Sophie",
            current_user_role="Owner",
        )
        defaults.update(overrides)
        return AssistantContext(**defaults)

    return _make


@pytest.fixture
def context(make_context) -> AssistantContext:
    return make_context()


@pytest.fixture
def operations() -> InMemoryDomainOperations:
    return InMemoryDomainOperations()


@pytest.fixture
def executor(operations) -> ActionExecutor:
    return ActionExecutor(operations)


@pytest.fixture
def engine() -> FlowEngine:
    return FlowEngine()


@pytest.fixture
def processor(executor) -> MessageProcessor:
    return MessageProcessor(
        executor=executor,
        flow_repository=StaticFlowRepository(),
        policy=RolePermissionPolicy(),
        thinking_delay_ms=0,
    )


@pytest.fixture
def chat_service(processor) -> ChatService:
    return ChatService(session_repository=InMemorySessionRepository(), processor=processor)


@pytest.fixture
def task_flow_definition():
    return HARDCODED_FLOWS["create_task"]


@pytest.fixture
def absence_flow_definition():
    return HARDCODED_FLOWS["request_absence"]
