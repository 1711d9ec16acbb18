"""Control-plane commands against a running relay."""

import asyncio
from typing import Any, Awaitable, Callable

import typer
from rich.console import Console

from scp_relay.cli.output import format_error, format_key_value, format_success, json_output
from scp_relay.cli.utils import RelayClient, RelayClientError

console = Console()


def _client(url: str) -> RelayClient:
    return RelayClient(url)


def _call(url: str, action: Callable[[RelayClient], Awaitable[dict]]) -> dict:
    async def _run() -> dict:
        async with _client(url) as client:
            return await action(client)

    try:
        return asyncio.run(_run())
    except RelayClientError as e:
        format_error(console, str(e), hint="Start a relay with 'scp-relay serve' or pass --url")
        raise typer.Exit(code=1)


def _emit(json_flag: bool, data: dict[str, Any]) -> None:
    if json_flag:
        json_output(console, data)
    else:
        format_key_value(console, data)


def create_command(url: str, json_flag: bool) -> None:
    """Create a session and print its code."""
    result = _call(url, lambda c: c.create_session())
    if json_flag:
        json_output(console, result)
        return
    format_success(console, f"Session created: {result['code']}")


def check_command(code: str, url: str, json_flag: bool) -> None:
    """Check a session code; exits 1 when the session does not exist."""
    result = _call(url, lambda c: c.check_session(code))
    _emit(json_flag, result)
    if not result.get("exists"):
        raise typer.Exit(code=1)


def health_command(url: str, json_flag: bool) -> None:
    result = _call(url, lambda c: c.health())
    _emit(json_flag, result)
