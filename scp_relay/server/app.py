"""FastAPI application factory."""
import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from scp_relay import __version__
from scp_relay.errors import RelayError
from scp_relay.server.config import RelayConfig, load_config_from_env
from scp_relay.server.handler import ConnectionHandler
from scp_relay.server.janitor import Janitor
from scp_relay.server.middleware.logging import RequestLoggingMiddleware
from scp_relay.server.models.responses import ErrorDetail, ErrorResponse
from scp_relay.server.relay import RelayEngine
from scp_relay.server.routes.health import create_health_router
from scp_relay.server.routes.sessions import create_sessions_router
from scp_relay.server.routes.websocket import create_websocket_router
from scp_relay.state.registry import SessionRegistry

logger = logging.getLogger(__name__)

API_PREFIX = "/api"


def create_app(
    config: Optional[RelayConfig] = None,
    registry: Optional[SessionRegistry] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    When called without arguments (e.g. via uvicorn --factory), loads
    configuration from environment variables. The session registry is
    created here unless one is passed in, and is shared by the routes,
    the connection handler and the janitor.
    """
    if config is None:
        config = load_config_from_env()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    if registry is None:
        registry = SessionRegistry()
    relay = RelayEngine(ack_delay=config.ack_delay)
    handler = ConnectionHandler(registry, relay)
    janitor = Janitor(
        registry,
        interval=config.janitor.sweep_interval,
        max_age=config.janitor.session_max_age,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        janitor.start()
        logger.info("Relay ready on %s:%d", config.host, config.port)
        yield
        await janitor.stop()
        await relay.aclose()
        logger.info("Relay stopped")

    app = FastAPI(
        title="SCP Relay",
        description="Pairs an SCP server with its clients and relays their messages",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.registry = registry
    app.state.relay = relay
    app.state.janitor = janitor

    app.add_middleware(RequestLoggingMiddleware)
    if config.cors.enabled:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(config.cors.allow_origins),
            allow_methods=["*"],
            allow_headers=["*"],
        )
    app.add_exception_handler(RelayError, _relay_error_handler)

    sessions_router = create_sessions_router(registry)
    app.include_router(sessions_router)
    app.include_router(sessions_router, prefix=API_PREFIX, include_in_schema=False)
    app.include_router(create_health_router(registry, started_at=time.monotonic()))
    app.include_router(create_websocket_router(handler))

    return app


async def _relay_error_handler(request: Request, exc: RelayError) -> JSONResponse:
    response = ErrorResponse(error=ErrorDetail(code=exc.error_code, message=exc.message, details=exc.details))
    return JSONResponse(status_code=exc.status_code, content=response.model_dump())
