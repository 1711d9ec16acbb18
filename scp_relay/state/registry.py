"""In-memory session registry.

The registry is owned by the application and mutated only from the event
loop. Every method finishes its mutation before it awaits any
notification, so handlers never observe a half-updated session.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from scp_relay.errors import InvalidSessionError, ServerAlreadyRegisteredError
from scp_relay.protocol.events import ClientDisconnectedEvent, ServerDisconnectedEvent
from scp_relay.state.codes import generate_code, normalize_code
from scp_relay.state.connection import Connection
from scp_relay.state.models import ClientEntry, Session

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SessionRegistry:
    def __init__(
        self,
        clock: Callable[[], datetime] = _utcnow,
        code_generator: Callable[[Callable[[str], bool]], str] = generate_code,
    ) -> None:
        self._clock = clock
        self._generate_code = code_generator
        self._sessions: dict[str, Session] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def codes(self) -> list[str]:
        return list(self._sessions)

    def create(self) -> str:
        """Allocate an empty session and return its code.

        Raises:
            CodeGenerationError: If no free code could be generated.
        """
        code = self._generate_code(lambda c: c in self._sessions)
        self._sessions[code] = Session(code=code, created_at=self._clock())
        logger.info("Session created code=%s", code)
        return code

    def exists(self, code: str) -> bool:
        return normalize_code(code) in self._sessions

    def get(self, code: str) -> Optional[Session]:
        return self._sessions.get(normalize_code(code))

    def _require(self, code: str) -> Session:
        session = self.get(code)
        if session is None:
            raise InvalidSessionError(details={"code": code})
        return session

    def register_server(self, code: str, connection: Connection) -> Session:
        """Attach ``connection`` as the session's server.

        Raises:
            InvalidSessionError: Unknown code.
            ServerAlreadyRegisteredError: The session already has a server.
        """
        session = self._require(code)
        if session.server is not None:
            raise ServerAlreadyRegisteredError(details={"code": session.code})
        session.server = connection
        logger.info("Server registered code=%s client_id=%s", session.code, connection.connection_id)
        return session

    def register_client(self, code: str, connection: Connection, username: str) -> ClientEntry:
        """Append a client entry; its ``client_id`` is the connection's id.

        Raises:
            InvalidSessionError: Unknown code.
        """
        session = self._require(code)
        entry = ClientEntry(connection=connection, username=username, client_id=connection.connection_id)
        session.clients.append(entry)
        logger.info(
            "Client registered code=%s username=%s client_id=%s",
            session.code, username, entry.client_id,
        )
        return entry

    async def remove_server(self, code: str, connection: Optional[Connection] = None) -> None:
        """Tear down the session and tell every open client.

        When ``connection`` is given, nothing happens unless it is the
        session's current server.
        """
        session = self.get(code)
        if session is None:
            return
        if connection is not None and session.server is not connection:
            logger.debug("Ignoring server removal for %s: not the registered server", session.code)
            return
        del self._sessions[session.code]
        session.server = None
        clients = session.open_clients()
        logger.info("Session removed code=%s clients=%d", session.code, len(clients))
        for entry in clients:
            await entry.connection.send(ServerDisconnectedEvent())

    async def remove_client(self, code: str, connection: Connection) -> None:
        """Drop the client entry for ``connection`` and tell the server."""
        session = self.get(code)
        if session is None:
            return
        removed = [c for c in session.clients if c.connection is connection]
        if not removed:
            return
        session.clients = [c for c in session.clients if c.connection is not connection]
        logger.info("Client removed code=%s client_id=%s", session.code, removed[0].client_id)
        server = session.server
        if server is not None and server.is_open:
            for entry in removed:
                await server.send(ClientDisconnectedEvent(client_id=entry.client_id))

    def sweep(self, max_age: timedelta) -> list[str]:
        """Remove sessions older than ``max_age`` without notifying anyone."""
        now = self._clock()
        expired = [code for code, s in self._sessions.items() if s.age(now) > max_age]
        for code in expired:
            age = self._sessions.pop(code).age(now)
            logger.info("Removing old session code=%s age=%s", code, age)
        return expired
