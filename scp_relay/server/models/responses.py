"""Response models for the HTTP control plane."""
from typing import Annotated, Any, Literal, Optional
from pydantic import BaseModel, Field


class CreateSessionResponse(BaseModel):
    code: Annotated[str, Field()]
    success: bool = True


class CheckSessionResponse(BaseModel):
    exists: bool
    code: Annotated[str, Field()]


class HealthResponse(BaseModel):
    status: Literal["ok"] = "ok"
    sessions: Annotated[int, Field(ge=0)]
    uptime: Annotated[float, Field(ge=0)]


class ErrorDetail(BaseModel):
    code: Annotated[str, Field()]
    message: Annotated[str, Field()]
    details: Optional[dict[str, Any]] = None


class ErrorResponse(BaseModel):
    error: ErrorDetail
