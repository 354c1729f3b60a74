"""
Chat Service - Application Orchestration Layer

This service is the host of the MessageProcessor. It loads the session,
threads the session's ActiveFlow through the processor, applies the
response (history, flow slot, clear-conversation signal) and saves the
session back. The processor itself never sees a session.
"""

import logging
from typing import Optional

from ..config import settings
from ..repositories.session import SessionRepository
from ..schemas.context import AssistantContext
from ..schemas.results import AssistantResponse, ResponseKind
from ..state.models import ChatMessage, SessionState
from .exceptions import MessageTooLongError, SessionNotFoundError
from .processor import MessageProcessor

logger = logging.getLogger(__name__)


class ChatService:
    def __init__(
        self,
        session_repository: SessionRepository,
        processor: MessageProcessor,
        simulate_thinking: bool = False,
    ):
        self.session_repo = session_repository
        self.processor = processor
        self.simulate_thinking = simulate_thinking

    def create_session(self, context: Optional[AssistantContext] = None) -> SessionState:
        """Creates a new session, opened with the welcome message."""
        session = self.session_repo.create()
        welcome = self.processor.welcome(context or AssistantContext())
        session.history.append(welcome.message)
        self.session_repo.save(session)
        logger.info(f"Session {session.session_id} created")
        return session

    def get_session(self, session_id: str) -> Optional[SessionState]:
        return self.session_repo.get(session_id)

    def delete_session(self, session_id: str) -> bool:
        return self.session_repo.delete(session_id)

    async def process_message(
        self, session_id: str, user_text: str, context: Optional[AssistantContext] = None
    ) -> AssistantResponse:
        """
        The Core Loop:
        1. Load Session
        2. Run the processor with the session's active flow
        3. Apply the response to the session
        4. Save Session
        """
        if len(user_text) > settings.MAX_INPUT_LENGTH:
            raise MessageTooLongError(
                f"Message exceeds {settings.MAX_INPUT_LENGTH} characters"
            )

        # 1. Load Session
        session = self._load(session_id)
        context = context or AssistantContext()

        # 2. Run the turn
        if self.simulate_thinking:
            await self.processor.simulate_thinking()
        response = await self.processor.process_message(user_text, context, session.active_flow)

        # 3. Apply
        user_message = ChatMessage(role="user", content=user_text)
        if response.kind == ResponseKind.CLEAR_CONVERSATION:
            session.history = [response.message]
        else:
            session.history.extend([user_message, response.message])
            self._trim_history(session)
        session.active_flow = response.flow

        # 4. Save Session
        self.session_repo.save(session)
        return response

    def cancel_flow(self, session_id: str, context: Optional[AssistantContext] = None) -> AssistantResponse:
        """Drops the session's active flow, if any."""
        session = self._load(session_id)
        response = self.processor.cancel_flow(context or AssistantContext())
        if session.active_flow is not None:
            session.history.append(response.message)
            self._trim_history(session)
        session.active_flow = None
        self.session_repo.save(session)
        return response

    def _load(self, session_id: str) -> SessionState:
        session = self.session_repo.get(session_id)
        if not session:
            raise SessionNotFoundError(f"Session {session_id} not found")
        return session

    @staticmethod
    def _trim_history(session: SessionState):
        overflow = len(session.history) - settings.MAX_CONVERSATION_HISTORY
        if overflow > 0:
            session.history = session.history[overflow:]
