"""Show the acknowledgment the relay synthesizes for an SCP record."""

from rich.console import Console

from scp_relay.cli.output import format_key_value, json_output
from scp_relay.protocol.scp import ScpFormatError, make_ack, parse_record

console = Console()


def ack_command(text: str, json_flag: bool) -> None:
    ack = make_ack(text)
    try:
        record = parse_record(ack)
        parsed = {"version": record.version, "kind": record.kind.value,
                  "id": record.message_id, "payload": record.payload}
    except ScpFormatError:
        parsed = None

    if json_flag:
        json_output(console, {"scpMessage": text, "ack": ack, "parsed": parsed})
        return
    console.print(ack, markup=False, highlight=False)
    if parsed is not None:
        format_key_value(console, parsed)
