import logging
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, status
from fastapi.responses import Response

from ..config import settings
from ..schemas.context import AssistantContext
from ..schemas.results import AssistantResponse
from ..services.chat import ChatService
from ..services.exceptions import MessageTooLongError, SessionNotFoundError
from ..services.processor import MessageProcessor
from .dependencies import get_chat_service, get_message_processor
from .schemas import (
    ChatResponse,
    CreateSessionRequest,
    CreateSessionResponse,
    FlowView,
    SessionRead,
    SuggestionList,
    UserMessage,
)

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title=settings.ASSISTANT_NAME)


def _to_chat_response(response: AssistantResponse) -> ChatResponse:
    # AssistantResponse (Service) -> ChatResponse (API)
    return ChatResponse(
        kind=response.kind,
        message=response.message,
        suggestions=response.suggestions,
        flow=FlowView.from_flow(response.flow),
        navigate_to=response.navigate_to,
        side_effects=response.side_effects,
    )


def _query_context(page: str, role: Optional[str], group_id: Optional[str]) -> AssistantContext:
    # Context for endpoints without a body
    return AssistantContext(current_page=page, current_user_role=role, current_group_id=group_id)


# --- Endpoints ---

@app.post(
    "/sessions",
    response_model=CreateSessionResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_session(
    request: Optional[CreateSessionRequest] = None,
    service: ChatService = Depends(get_chat_service),
):
    """Starts a new session, opened with the welcome message."""
    context = request.context if request and request.context else AssistantContext()
    session = service.create_session(context)
    return CreateSessionResponse(
        session_id=session.session_id,
        welcome=session.history[0],
        suggestions=service.processor.suggestions.welcome(context),
    )


@app.get("/sessions/{session_id}", response_model=SessionRead)
def get_session(
    session_id: str,
    service: ChatService = Depends(get_chat_service),
):
    session = service.get_session(session_id)
    if not session:
        raise HTTPException(status_code=404, detail="Session not found")

    return SessionRead(
        session_id=session.session_id,
        history=session.history,
        active_flow=FlowView.from_flow(session.active_flow),
        updated_at=session.updated_at,
    )


@app.delete("/sessions/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_session(
    session_id: str,
    service: ChatService = Depends(get_chat_service),
):
    """
    Deletes a session. Returns 204 No Content on success.
    """
    success = service.delete_session(session_id)
    if not success:
        raise HTTPException(status_code=404, detail="Session not found")

    # For 204, we must explicitly return a Response object with no content
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@app.post("/sessions/{session_id}/messages", response_model=ChatResponse)
async def handle_message(
    session_id: str,
    message: UserMessage,
    service: ChatService = Depends(get_chat_service),
):
    try:
        response = await service.process_message(session_id, message.text, message.context)
        return _to_chat_response(response)

    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except MessageTooLongError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))


@app.delete("/sessions/{session_id}/flow", response_model=ChatResponse)
def cancel_flow(
    session_id: str,
    page: str = "/",
    role: Optional[str] = None,
    group_id: Optional[str] = None,
    service: ChatService = Depends(get_chat_service),
):
    """Host-initiated cancellation of the session's active flow."""
    context = _query_context(page, role, group_id)
    try:
        return _to_chat_response(service.cancel_flow(session_id, context))
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@app.get("/suggestions", response_model=SuggestionList)
def get_suggestions(
    q: Optional[str] = None,
    page: str = "/",
    role: Optional[str] = None,
    group_id: Optional[str] = None,
    processor: MessageProcessor = Depends(get_message_processor),
):
    """Welcome suggestions, or autocomplete when `q` is given."""
    context = _query_context(page, role, group_id)
    if q:
        return SuggestionList(suggestions=processor.suggestions.autocomplete(q, context))
    return SuggestionList(suggestions=processor.suggestions.welcome(context))
