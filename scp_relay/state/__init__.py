"""Session state module."""
from scp_relay.state.codes import generate_code, generate_connection_id, normalize_code
from scp_relay.state.connection import Connection, ConnectionState, Transport
from scp_relay.state.models import ClientEntry, LoggedMessage, Session
from scp_relay.state.registry import SessionRegistry
__all__ = ["generate_code", "generate_connection_id", "normalize_code", "Connection", "ConnectionState",
           "Transport", "ClientEntry", "LoggedMessage", "Session", "SessionRegistry"]
