"""Outbound WebSocket events produced by the relay.

Events serialize with camelCase keys and drop absent optional fields.
"""
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

MessageId = Union[int, str]


class RelayEvent(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class ConnectedEvent(RelayEvent):
    type: Literal["connected"] = "connected"
    client_id: Annotated[str, Field(alias="clientId")]


class RegisteredEvent(RelayEvent):
    type: Literal["registered"] = "registered"
    role: Literal["server", "client"]
    code: str
    username: Optional[str] = None
    client_id: Annotated[str, Field(alias="clientId")]


class ErrorEvent(RelayEvent):
    type: Literal["error"] = "error"
    message: str


class ClientConnectedEvent(RelayEvent):
    type: Literal["client-connected"] = "client-connected"
    username: str
    client_id: Annotated[str, Field(alias="clientId")]


class ClientDisconnectedEvent(RelayEvent):
    type: Literal["client-disconnected"] = "client-disconnected"
    client_id: Annotated[str, Field(alias="clientId")]


class ServerDisconnectedEvent(RelayEvent):
    type: Literal["server-disconnected"] = "server-disconnected"


class ScpMessageEvent(RelayEvent):
    type: Literal["scp-message"] = "scp-message"
    scp_message: Annotated[str, Field(alias="scpMessage")]
    direction: str
    from_: Annotated[Literal["server", "client"], Field(alias="from")]
    message_id: Annotated[Optional[MessageId], Field(alias="messageId")] = None
    client_id: Annotated[Optional[str], Field(alias="clientId")] = None
