"""
Service Layer Exceptions

Custom exceptions for the assistant services. None of them crosses the
MessageProcessor boundary; the ChatService ones surface to the API as
ValueErrors.
"""


class AssistantError(Exception):
    """Base class for assistant errors."""
    pass


class FlowDefinitionNotFoundError(AssistantError):
    """Raised when an action requires a flow that is not registered."""

    def __init__(self, action: str):
        super().__init__(f"No flow registered for action '{action}'")
        self.action = action


class DomainOperationError(AssistantError):
    """
    Raised by a DomainOperations implementation when an operation cannot
    complete. The message is user-facing.
    """
    pass


class SessionNotFoundError(AssistantError, ValueError):
    """Raised when a session id does not exist."""
    pass


class MessageTooLongError(AssistantError, ValueError):
    """Raised when a user message exceeds the configured maximum length."""
    pass
