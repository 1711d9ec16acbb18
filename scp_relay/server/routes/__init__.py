"""Route handlers for the relay."""
from scp_relay.server.routes.sessions import create_sessions_router
from scp_relay.server.routes.health import create_health_router
from scp_relay.server.routes.websocket import create_websocket_router
__all__ = [
    "create_sessions_router",
    "create_health_router",
    "create_websocket_router",
]
