"""Tests for session code and connection id generation."""
import pytest

from scp_relay.errors import CodeGenerationError
from scp_relay.state.codes import (
    CODE_ALPHABET,
    CONNECTION_ID_ALPHABET,
    generate_code,
    generate_connection_id,
    normalize_code,
)


class TestGenerateCode:
    def test_length_and_alphabet(self) -> None:
        for _ in range(200):
            code = generate_code(lambda c: False)
            assert len(code) == 8
            assert set(code) <= set(CODE_ALPHABET)

    def test_retries_until_free(self) -> None:
        seen: list[str] = []

        def is_taken(code: str) -> bool:
            seen.append(code)
            return len(seen) < 4

        code = generate_code(is_taken)
        assert len(seen) == 4
        assert code == seen[-1]

    def test_unique_against_live_codes(self) -> None:
        live: set[str] = set()
        for _ in range(500):
            live.add(generate_code(lambda c: c in live))
        assert len(live) == 500

    def test_gives_up_after_max_attempts(self) -> None:
        with pytest.raises(CodeGenerationError):
            generate_code(lambda c: True, max_attempts=5)


def test_connection_id_shape() -> None:
    cid = generate_connection_id()
    assert len(cid) == 9
    assert set(cid) <= set(CONNECTION_ID_ALPHABET)


def test_normalize_code_upper_cases() -> None:
    assert normalize_code("abcd1234") == "ABCD1234"
