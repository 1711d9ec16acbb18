"""Inbound WebSocket messages accepted by the relay."""
import json
from typing import Annotated, Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from scp_relay.errors import MalformedMessageError
from scp_relay.protocol.events import MessageId


class InboundMessage(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class RegisterServerRequest(InboundMessage):
    type: Literal["register-server"] = "register-server"
    code: Annotated[str, Field(min_length=1)]


class RegisterClientRequest(InboundMessage):
    type: Literal["register-client"] = "register-client"
    code: Annotated[str, Field(min_length=1)]
    username: str


class ScpMessageRequest(InboundMessage):
    type: Literal["scp-message"] = "scp-message"
    code: Annotated[str, Field(min_length=1)]
    scp_message: Annotated[str, Field(alias="scpMessage")]
    direction: str
    message_id: Annotated[Optional[MessageId], Field(alias="messageId")] = None


class DisconnectRequest(InboundMessage):
    type: Literal["disconnect"] = "disconnect"


INBOUND_MESSAGES: dict[str, type[InboundMessage]] = {
    "register-server": RegisterServerRequest,
    "register-client": RegisterClientRequest,
    "scp-message": ScpMessageRequest,
    "disconnect": DisconnectRequest,
}


def decode_envelope(raw: str) -> dict[str, Any]:
    """Decode a raw frame into a JSON object carrying a string ``type``.

    Raises:
        MalformedMessageError: If the frame is not such an object.
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise MalformedMessageError(details={"reason": str(e)}) from e
    if not isinstance(data, dict):
        raise MalformedMessageError(details={"reason": "not a JSON object"})
    if not isinstance(data.get("type"), str):
        raise MalformedMessageError(details={"reason": "missing message type"})
    return data
