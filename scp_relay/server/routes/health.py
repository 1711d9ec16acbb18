"""GET /health endpoint handler."""
import time
from fastapi import APIRouter, status
from scp_relay.server.models.responses import HealthResponse
from scp_relay.state.registry import SessionRegistry


def create_health_router(registry: SessionRegistry, started_at: float) -> APIRouter:
    """Create health router; ``started_at`` is a ``time.monotonic()`` reading."""
    router = APIRouter()

    @router.get("/health", response_model=HealthResponse, status_code=status.HTTP_200_OK, tags=["status"])
    async def health_check() -> HealthResponse:
        return HealthResponse(
            status="ok", sessions=len(registry), uptime=round(time.monotonic() - started_at, 3),
        )

    return router
