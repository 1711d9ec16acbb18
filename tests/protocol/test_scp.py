"""Tests for the SCP record format and acknowledgment rewriting."""
import pytest

from scp_relay.protocol.scp import (
    ACK_MARKER,
    ScpFormatError,
    format_record,
    hello_record,
    make_ack,
    parse_record,
)
from scp_relay.protocol.types import MessageKind


class TestMakeAck:
    def test_msg_becomes_ack(self) -> None:
        assert make_ack("SCP/1.1 | MSG | id=0 | hi") == "SCP/1.1 | ACK | id=0 | MSG_RECEIVED"

    def test_hello_becomes_ack(self) -> None:
        assert make_ack("SCP/1.1 | HELLO | id=0 | alice") == "SCP/1.1 | ACK | id=0 | MSG_RECEIVED"

    def test_bye_becomes_ack(self) -> None:
        assert make_ack("SCP/1.1 | BYE | id=9 | later") == "SCP/1.1 | ACK | id=9 | MSG_RECEIVED"

    def test_only_first_kind_occurrence_replaced(self) -> None:
        ack = make_ack("SCP/1.1 | MSG | id=2 | MSG in payload")
        assert ack == f"SCP/1.1 | ACK | id=2 | {ACK_MARKER}"

    def test_only_last_field_replaced(self) -> None:
        assert make_ack("SCP/1.1 | MSG | id=1 | a|b") == "SCP/1.1 | ACK | id=1 | a| MSG_RECEIVED"

    def test_empty_trailing_field_left_alone(self) -> None:
        assert make_ack("SCP/1.1 | MSG | id=1 |") == "SCP/1.1 | ACK | id=1 |"

    def test_ack_of_ack_keeps_kind(self) -> None:
        assert make_ack("SCP/1.1 | ACK | id=3 | x") == "SCP/1.1 | ACK | id=3 | MSG_RECEIVED"


class TestParseRecord:
    def test_parses_fields(self) -> None:
        record = parse_record("SCP/1.1 | MSG | id=12 | hello world")
        assert record.version == "1.1"
        assert record.kind is MessageKind.MSG
        assert record.message_id == 12
        assert record.payload == "hello world"

    def test_trims_whitespace(self) -> None:
        record = parse_record("  SCP/1.1|HELLO|id=0|  bob  ")
        assert record.kind is MessageKind.HELLO
        assert record.payload == "bob"

    def test_payload_may_contain_pipes(self) -> None:
        assert parse_record("SCP/1.1 | MSG | id=1 | a | b").payload == "a | b"

    def test_to_text_round_trips_canonical_form(self) -> None:
        text = "SCP/1.1 | BYE | id=4 | done"
        assert parse_record(text).to_text() == text

    @pytest.mark.parametrize("text", [
        "SCP/1.1 | MSG | id=1",
        "HTTP/1.1 | MSG | id=1 | x",
        "SCP/1.1 | PING | id=1 | x",
        "SCP/1.1 | MSG | id=abc | x",
        "SCP/1.1 | MSG | 7 | x",
    ])
    def test_rejects_malformed(self, text: str) -> None:
        with pytest.raises(ScpFormatError):
            parse_record(text)


def test_hello_record() -> None:
    assert hello_record("alice") == "SCP/1.1 | HELLO | id=0 | alice"


def test_format_record_accepts_plain_kind() -> None:
    assert format_record("MSG", 5, "x", version="2.0") == "SCP/2.0 | MSG | id=5 | x"
