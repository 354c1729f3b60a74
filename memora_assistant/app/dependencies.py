"""
Dependency Injection Wiring (Composition Root).

This module acts as the central "container" for the application's services.
It is responsible for:
1. Instantiating the core Singleton services (Repositories, Policy, Executor).
2. Wiring them together (e.g., injecting the Executor and Flow Repository
   into the MessageProcessor).
3. Managing the lifecycle of these objects using @lru_cache to ensure
   they are created only once per application process.

Tests override these providers through `app.dependency_overrides`.
"""

from functools import lru_cache

from fastapi import Depends

from ..context.provider import PermissionPolicy, RolePermissionPolicy
from ..execution.executor import ActionExecutor
from ..repositories.flow import FlowRepository, StaticFlowRepository
from ..repositories.session import InMemorySessionRepository, SessionRepository
from ..services.chat import ChatService
from ..services.operations import DomainOperations, InMemoryDomainOperations
from ..services.processor import MessageProcessor


# Domain Operations (Singleton)
# Note: In-memory records must be a singleton so data persists across requests!
@lru_cache()
def get_domain_operations() -> DomainOperations:
    return InMemoryDomainOperations()


@lru_cache()
def get_flow_repository() -> FlowRepository:
    return StaticFlowRepository()


@lru_cache()
def get_session_repository() -> SessionRepository:
    return InMemorySessionRepository()


@lru_cache()
def get_permission_policy() -> PermissionPolicy:
    return RolePermissionPolicy()


@lru_cache()
def get_action_executor(
    operations: DomainOperations = Depends(get_domain_operations),
) -> ActionExecutor:
    return ActionExecutor(operations)


# The Processor (Singleton Service)
@lru_cache()
def get_message_processor(
    executor: ActionExecutor = Depends(get_action_executor),
    flow_repo: FlowRepository = Depends(get_flow_repository),
    policy: PermissionPolicy = Depends(get_permission_policy),
) -> MessageProcessor:
    return MessageProcessor(executor=executor, flow_repository=flow_repo, policy=policy)


# The Chat Service (Singleton Service)
@lru_cache()
def get_chat_service(
    session_repo: SessionRepository = Depends(get_session_repository),
    processor: MessageProcessor = Depends(get_message_processor),
) -> ChatService:
    return ChatService(
        session_repository=session_repo,
        processor=processor,
        simulate_thinking=True,
    )
