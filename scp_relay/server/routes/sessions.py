"""Session control-plane endpoints."""
from fastapi import APIRouter, status

from scp_relay.server.models.responses import CheckSessionResponse, CreateSessionResponse
from scp_relay.state.codes import normalize_code
from scp_relay.state.registry import SessionRegistry


def create_sessions_router(registry: SessionRegistry) -> APIRouter:
    """Create session router with injected dependencies."""
    router = APIRouter()

    @router.post("/create-session", response_model=CreateSessionResponse, status_code=status.HTTP_200_OK, tags=["sessions"])
    async def create_session() -> CreateSessionResponse:
        """Create an empty session a server can register with."""
        return CreateSessionResponse(code=registry.create(), success=True)

    @router.get("/check-session/{code}", response_model=CheckSessionResponse, tags=["sessions"])
    async def check_session(code: str) -> CheckSessionResponse:
        """Check whether a session code is live (case-insensitive)."""
        return CheckSessionResponse(exists=registry.exists(code), code=normalize_code(code))

    return router
