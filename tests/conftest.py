"""Pytest fixtures for relay tests."""
import json
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import pytest
from fastapi.testclient import TestClient

from scp_relay.server.app import create_app
from scp_relay.server.config import CorsConfig, JanitorConfig, RelayConfig
from scp_relay.state.connection import Connection
from scp_relay.state.registry import SessionRegistry


class FakeTransport:
    """Records frames the relay sends to one participant."""

    def __init__(self) -> None:
        self.sent: list[str] = []
        self.closed = False
        self.close_code: Optional[int] = None

    async def send_text(self, data: str) -> None:
        if self.closed:
            raise RuntimeError("transport closed")
        self.sent.append(data)

    async def close(self, code: int = 1000) -> None:
        self.closed = True
        self.close_code = code

    @property
    def events(self) -> list[dict]:
        return [json.loads(s) for s in self.sent]

    def of_type(self, event_type: str) -> list[dict]:
        return [e for e in self.events if e["type"] == event_type]


class FakeClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def registry(clock: FakeClock) -> SessionRegistry:
    return SessionRegistry(clock=clock)


@pytest.fixture
def make_connection() -> Callable[..., tuple[Connection, FakeTransport]]:
    def _make(connection_id: Optional[str] = None) -> tuple[Connection, FakeTransport]:
        transport = FakeTransport()
        return Connection(transport, connection_id=connection_id), transport
    return _make


@pytest.fixture
def relay_config() -> RelayConfig:
    return RelayConfig(
        host="127.0.0.1", port=3001, log_level="INFO", ack_delay=0.01,
        janitor=JanitorConfig(sweep_interval=3600, session_max_age=3600),
        cors=CorsConfig(enabled=True, allow_origins=("*",)),
    )


@pytest.fixture
def client(relay_config: RelayConfig) -> TestClient:
    app = create_app(relay_config)
    with TestClient(app) as c:
        yield c
