"""In-memory session records."""
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Optional, Union

from scp_relay.state.connection import Connection


@dataclass(frozen=True)
class ClientEntry:
    """A client attached to a session.

    Attributes:
        connection: The client's connection; matched by identity on removal.
        username: Display name given at registration.
        client_id: Identifier the server uses to tell clients apart.
    """

    connection: Connection
    username: str
    client_id: str


@dataclass(frozen=True)
class LoggedMessage:
    """An SCP record the relay accepted, kept for diagnostics only."""

    scp_message: str
    direction: str
    timestamp: datetime
    message_id: Optional[Union[int, str]] = None


@dataclass
class Session:
    code: str
    created_at: datetime
    server: Optional[Connection] = None
    clients: list[ClientEntry] = field(default_factory=list)
    messages: list[LoggedMessage] = field(default_factory=list)

    def age(self, now: datetime) -> timedelta:
        return now - self.created_at

    def has_open_server(self) -> bool:
        return self.server is not None and self.server.is_open

    def open_clients(self) -> list[ClientEntry]:
        """Snapshot of the clients that are open right now, in join order."""
        return [c for c in self.clients if c.connection.is_open]

    def log_message(self, message: LoggedMessage) -> None:
        self.messages.append(message)
