"""Enumerations shared by the relay wire formats."""
from enum import Enum


class MessageKind(str, Enum):
    HELLO = "HELLO"
    MSG = "MSG"
    BYE = "BYE"
    ACK = "ACK"


class Direction(str, Enum):
    CLIENT_TO_SERVER = "client-to-server"
    SERVER_TO_CLIENT = "server-to-client"


class Role(str, Enum):
    """Role a connection takes once it registers with a session."""
    SERVER = "server"
    CLIENT = "client"
