"""Per-connection state record."""
import json
import logging
from enum import Enum
from typing import Optional, Protocol

from scp_relay.errors import AlreadyRegisteredError
from scp_relay.protocol.events import RelayEvent
from scp_relay.protocol.types import Role
from scp_relay.state.codes import generate_connection_id

logger = logging.getLogger(__name__)


class Transport(Protocol):
    """The part of a WebSocket the relay needs."""

    async def send_text(self, data: str) -> None: ...

    async def close(self, code: int = 1000) -> None: ...


class ConnectionState(Enum):
    UNREGISTERED = "unregistered"
    REGISTERED = "registered"
    CLOSED = "closed"


class Connection:
    """One participant's link to the relay.

    Moves ``UNREGISTERED -> REGISTERED -> CLOSED`` exactly once each way; a
    registered connection keeps its role and session code until it closes.
    """

    def __init__(self, transport: Transport, connection_id: Optional[str] = None) -> None:
        self.connection_id = connection_id or generate_connection_id()
        self.role: Optional[Role] = None
        self.session_code: Optional[str] = None
        self.state = ConnectionState.UNREGISTERED
        self._transport = transport
        self._transport_open = True

    def __repr__(self) -> str:
        return f"Connection(id={self.connection_id!r}, role={self.role}, state={self.state.value})"

    @property
    def is_open(self) -> bool:
        return self._transport_open and self.state is not ConnectionState.CLOSED

    def ensure_unregistered(self) -> None:
        if self.state is ConnectionState.CLOSED:
            raise AlreadyRegisteredError("Connection is closed")
        if self.state is ConnectionState.REGISTERED:
            raise AlreadyRegisteredError()

    def bind(self, role: Role, session_code: str) -> None:
        self.ensure_unregistered()
        self.role = role
        self.session_code = session_code
        self.state = ConnectionState.REGISTERED

    def mark_closed(self) -> None:
        self.state = ConnectionState.CLOSED

    def mark_transport_closed(self) -> None:
        self._transport_open = False

    async def send(self, event: RelayEvent) -> bool:
        """Send an event; returns False when it could not be delivered.

        Delivery failures are logged and never raised.
        """
        if not self.is_open:
            logger.debug("Dropping %s for closed connection %s", event.__class__.__name__, self.connection_id)
            return False
        try:
            await self._transport.send_text(json.dumps(event.to_wire()))
        except Exception as exc:
            self._transport_open = False
            logger.warning("Send to %s failed: %s", self.connection_id, exc)
            return False
        return True

    async def close(self, code: int = 1000) -> None:
        """Close the underlying transport if it is still open."""
        if not self._transport_open:
            return
        self._transport_open = False
        try:
            await self._transport.close(code)
        except RuntimeError as exc:
            logger.debug("Transport for %s already closed: %s", self.connection_id, exc)
