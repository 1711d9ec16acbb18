"""Per-connection message handling.

Every relay error raised while handling a frame is turned into an
``error`` event for the sender; the connection stays open.
"""
import logging
from typing import Awaitable, Callable

from pydantic import ValidationError

from scp_relay.errors import MalformedMessageError, RelayError, SessionNotFoundError
from scp_relay.protocol.events import ConnectedEvent, ErrorEvent, RegisteredEvent
from scp_relay.protocol.requests import (
    INBOUND_MESSAGES,
    DisconnectRequest,
    InboundMessage,
    RegisterClientRequest,
    RegisterServerRequest,
    ScpMessageRequest,
    decode_envelope,
)
from scp_relay.protocol.types import Role
from scp_relay.server.relay import RelayEngine
from scp_relay.state.connection import Connection, ConnectionState
from scp_relay.state.registry import SessionRegistry

logger = logging.getLogger(__name__)


class ConnectionHandler:
    def __init__(self, registry: SessionRegistry, relay: RelayEngine) -> None:
        self._registry = registry
        self._relay = relay
        self._handlers: dict[type[InboundMessage], Callable[[Connection, InboundMessage], Awaitable[None]]] = {
            RegisterServerRequest: self._register_server,
            RegisterClientRequest: self._register_client,
            ScpMessageRequest: self._scp_message,
            DisconnectRequest: self._disconnect,
        }

    async def on_open(self, connection: Connection) -> None:
        logger.info("New connection client_id=%s", connection.connection_id)
        await connection.send(ConnectedEvent(client_id=connection.connection_id))

    async def on_message(self, connection: Connection, raw: str) -> None:
        try:
            message = self._decode(connection, raw)
            if message is None:
                return
            await self._handlers[type(message)](connection, message)
        except MalformedMessageError as exc:
            logger.warning("Message parsing error from %s: %s", connection.connection_id, exc.details)
            await connection.send(ErrorEvent(message=exc.message))
        except RelayError as exc:
            logger.info("Rejected message from %s: %s", connection.connection_id, exc.message)
            await connection.send(ErrorEvent(message=exc.message))

    async def on_close(self, connection: Connection) -> None:
        """Release whatever the connection holds; safe to call twice."""
        if connection.state is ConnectionState.CLOSED:
            return
        role, code = connection.role, connection.session_code
        connection.mark_closed()
        logger.info("Connection closed client_id=%s role=%s", connection.connection_id, role and role.value)
        if role is Role.SERVER:
            await self._registry.remove_server(code, connection=connection)
        elif role is Role.CLIENT:
            await self._registry.remove_client(code, connection)

    def _decode(self, connection: Connection, raw: str) -> InboundMessage | None:
        data = decode_envelope(raw)
        model = INBOUND_MESSAGES.get(data["type"])
        if model is None:
            logger.warning("Unknown message type %r from %s", data["type"], connection.connection_id)
            return None
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise MalformedMessageError(details={"type": data["type"], "errors": e.error_count()}) from e

    async def _register_server(self, connection: Connection, message: RegisterServerRequest) -> None:
        connection.ensure_unregistered()
        session = self._registry.register_server(message.code, connection)
        connection.bind(Role.SERVER, session.code)
        await connection.send(RegisteredEvent(
            role=Role.SERVER.value, code=session.code, client_id=connection.connection_id,
        ))

    async def _register_client(self, connection: Connection, message: RegisterClientRequest) -> None:
        connection.ensure_unregistered()
        entry = self._registry.register_client(message.code, connection, message.username)
        session = self._registry.get(message.code)
        connection.bind(Role.CLIENT, session.code)
        await connection.send(RegisteredEvent(
            role=Role.CLIENT.value, code=session.code,
            username=entry.username, client_id=entry.client_id,
        ))
        await self._relay.introduce(session, entry)

    async def _scp_message(self, connection: Connection, message: ScpMessageRequest) -> None:
        session = self._registry.get(message.code)
        if session is None:
            raise SessionNotFoundError(details={"code": message.code})
        await self._relay.forward(
            session, connection, message.scp_message, message.direction, message.message_id,
        )

    async def _disconnect(self, connection: Connection, message: DisconnectRequest) -> None:
        await self.on_close(connection)
        await connection.close()
