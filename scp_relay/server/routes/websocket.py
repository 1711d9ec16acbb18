"""WebSocket transport for relay participants."""
import logging

from fastapi import APIRouter, WebSocket

from scp_relay.server.handler import ConnectionHandler
from scp_relay.state.connection import Connection

logger = logging.getLogger(__name__)

WEBSOCKET_PATHS = ("/", "/ws")


def create_websocket_router(handler: ConnectionHandler) -> APIRouter:
    """Create the WebSocket router; every frame goes through ``handler``."""
    router = APIRouter()

    async def relay_socket(websocket: WebSocket) -> None:
        await websocket.accept()
        connection = Connection(websocket)
        await handler.on_open(connection)
        try:
            while connection.is_open:
                frame = await websocket.receive()
                if frame["type"] == "websocket.disconnect":
                    break
                raw = frame.get("text")
                if raw is None:
                    raw = (frame.get("bytes") or b"").decode("utf-8", errors="replace")
                await handler.on_message(connection, raw)
        finally:
            connection.mark_transport_closed()
            await handler.on_close(connection)

    for path in WEBSOCKET_PATHS:
        router.add_api_websocket_route(path, relay_socket)
    return router
