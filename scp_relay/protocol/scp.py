"""SCP record text format.

An SCP record is a single line of four pipe-delimited fields::

    SCP/1.1 | MSG | id=3 | hello there

Fields are whitespace-trimmed. Everything after the third delimiter is the
payload, so payloads may contain ``|`` themselves. The relay never
interprets payloads; parsing is used for logging and by the CLI.
"""
import re
from dataclasses import dataclass

from scp_relay.errors import MalformedMessageError
from scp_relay.protocol.types import MessageKind

SCP_VERSION = "1.1"
ACK_MARKER = "MSG_RECEIVED"

_VERSION_PATTERN = re.compile(r"^SCP/(\d+(?:\.\d+)*)$")
_ID_PATTERN = re.compile(r"^id=(-?\d+)$")
_ACKED_KIND = re.compile(r"MSG|HELLO|BYE")
_TRAILING_FIELD = re.compile(r"\|([^|]+)\Z")


class ScpFormatError(MalformedMessageError):
    default_message = "Invalid SCP record"


@dataclass(frozen=True)
class ScpRecord:
    """A parsed SCP record."""

    version: str
    kind: MessageKind
    message_id: int
    payload: str

    def to_text(self) -> str:
        return format_record(self.kind, self.message_id, self.payload, version=self.version)


def format_record(kind: MessageKind | str, message_id: int, payload: str, version: str = SCP_VERSION) -> str:
    kind_text = kind.value if isinstance(kind, MessageKind) else kind
    return f"SCP/{version} | {kind_text} | id={message_id} | {payload}"


def parse_record(text: str) -> ScpRecord:
    """Parse SCP record text.

    Raises:
        ScpFormatError: If the text does not have four fields, an
            ``SCP/<version>`` tag, a known kind and an ``id=<int>`` field.
    """
    parts = [p.strip() for p in text.split("|", 3)]
    if len(parts) != 4:
        raise ScpFormatError(f"Expected 4 fields, got {len(parts)}")
    version_field, kind_field, id_field, payload = parts

    version_match = _VERSION_PATTERN.match(version_field)
    if not version_match:
        raise ScpFormatError(f"Bad version tag: {version_field!r}")
    try:
        kind = MessageKind(kind_field)
    except ValueError as e:
        raise ScpFormatError(f"Unknown kind: {kind_field!r}") from e
    id_match = _ID_PATTERN.match(id_field)
    if not id_match:
        raise ScpFormatError(f"Bad id field: {id_field!r}")

    return ScpRecord(
        version=version_match.group(1), kind=kind,
        message_id=int(id_match.group(1)), payload=payload,
    )


def hello_record(username: str) -> str:
    """The HELLO a client implicitly sends when it joins a session."""
    return format_record(MessageKind.HELLO, 0, username)


def make_ack(text: str) -> str:
    """Derive the acknowledgment text for a relayed record.

    The first ``MSG``/``HELLO``/``BYE`` becomes ``ACK`` and the last field
    is replaced with the ``MSG_RECEIVED`` marker. Text that is not a
    well-formed record is rewritten the same way, best effort.
    """
    acked = _ACKED_KIND.sub(MessageKind.ACK.value, text, count=1)
    return _TRAILING_FIELD.sub(f"| {ACK_MARKER}", acked, count=1)
