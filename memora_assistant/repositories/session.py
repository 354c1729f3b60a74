import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Dict, Optional

from ..state.models import SessionState


class SessionRepository(ABC):
    """
    Defines how the application accesses sessions.
    This allows us change how data is accessed (Memory -> Redis -> API) later
    without changing the ChatService code.
    """

    @abstractmethod
    def create(self) -> SessionState:
        """Creates a new empty session with a unique ID."""
        pass

    @abstractmethod
    def get(self, session_id: str) -> Optional[SessionState]:
        """Retrieves a session by ID."""
        pass

    @abstractmethod
    def save(self, session: SessionState):
        """Persists the session state."""
        pass

    @abstractmethod
    def delete(self, session_id: str) -> bool:
        """Deletes a session. Returns True if found and deleted."""
        pass


class InMemorySessionRepository(SessionRepository):
    """
    Uses in-memory dictionary for session storage. Sessions live as long
    as the process does.
    """

    def __init__(self):
        self._store: Dict[str, SessionState] = {}

    def create(self) -> SessionState:
        new_id = str(uuid.uuid4())
        session = SessionState(session_id=new_id)
        self._store[new_id] = session
        return session

    def get(self, session_id: str) -> Optional[SessionState]:
        return self._store.get(session_id)

    def save(self, session: SessionState):
        session.updated_at = datetime.now(timezone.utc)
        self._store[session.session_id] = session

    def delete(self, session_id: str) -> bool:
        return self._store.pop(session_id, None) is not None
