"""Custom exception types for the relay."""
from typing import Any, Optional


class RelayError(Exception):
    status_code: int = 500
    error_code: str = "INTERNAL_ERROR"
    default_message: str = "Internal relay error"

    def __init__(self, message: Optional[str] = None, details: Optional[dict[str, Any]] = None) -> None:
        message = message or self.default_message
        super().__init__(message)
        self.message = message
        self.details = details


class InvalidSessionError(RelayError):
    """A registration named a session code that does not exist."""
    status_code = 404
    error_code = "INVALID_SESSION"
    default_message = "Invalid session code"


class ServerAlreadyRegisteredError(RelayError):
    status_code = 409
    error_code = "SERVER_ALREADY_REGISTERED"
    default_message = "Server already registered for this session"


class SessionNotFoundError(RelayError):
    """An SCP message was addressed to a session that is gone."""
    status_code = 404
    error_code = "SESSION_NOT_FOUND"
    default_message = "Session not found"


class MalformedMessageError(RelayError):
    status_code = 400
    error_code = "MALFORMED_MESSAGE"
    default_message = "Invalid message format"


class AlreadyRegisteredError(RelayError):
    """A connection tried to take a second role."""
    status_code = 409
    error_code = "ALREADY_REGISTERED"
    default_message = "Connection already registered"


class CodeGenerationError(RelayError):
    status_code = 503
    error_code = "CODE_GENERATION_FAILED"
    default_message = "Could not allocate a free session code"
