"""Pydantic models for control-plane responses."""
from scp_relay.server.models.responses import (
    CheckSessionResponse,
    CreateSessionResponse,
    ErrorDetail,
    ErrorResponse,
    HealthResponse,
)

__all__ = [
    "CheckSessionResponse",
    "CreateSessionResponse",
    "ErrorDetail",
    "ErrorResponse",
    "HealthResponse",
]
