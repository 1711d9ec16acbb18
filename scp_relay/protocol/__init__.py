"""Wire formats: SCP record text, inbound requests and outbound events."""
from scp_relay.protocol.events import (
    ClientConnectedEvent,
    ClientDisconnectedEvent,
    ConnectedEvent,
    ErrorEvent,
    RegisteredEvent,
    RelayEvent,
    ScpMessageEvent,
    ServerDisconnectedEvent,
)
from scp_relay.protocol.requests import (
    INBOUND_MESSAGES,
    DisconnectRequest,
    InboundMessage,
    RegisterClientRequest,
    RegisterServerRequest,
    ScpMessageRequest,
    decode_envelope,
)
from scp_relay.protocol.scp import (
    ACK_MARKER,
    SCP_VERSION,
    ScpFormatError,
    ScpRecord,
    format_record,
    hello_record,
    make_ack,
    parse_record,
)
from scp_relay.protocol.types import Direction, MessageKind, Role

__all__ = [
    "ClientConnectedEvent", "ClientDisconnectedEvent", "ConnectedEvent", "ErrorEvent",
    "RegisteredEvent", "RelayEvent", "ScpMessageEvent", "ServerDisconnectedEvent",
    "INBOUND_MESSAGES", "DisconnectRequest", "InboundMessage", "RegisterClientRequest",
    "RegisterServerRequest", "ScpMessageRequest", "decode_envelope",
    "ACK_MARKER", "SCP_VERSION", "ScpFormatError", "ScpRecord", "format_record",
    "hello_record", "make_ack", "parse_record",
    "Direction", "MessageKind", "Role",
]
