"""Run the relay server."""

from dataclasses import replace
from typing import Optional

import typer
import uvicorn
from rich.console import Console

from scp_relay.cli.output import format_error
from scp_relay.server.app import create_app
from scp_relay.server.config import load_config_from_env

console = Console()


def serve_command(host: Optional[str], port: Optional[int], log_level: Optional[str]) -> None:
    """Serve the relay; flags override the RELAY_* environment."""
    try:
        config = load_config_from_env()
    except ValueError as e:
        format_error(console, str(e), hint="Check the RELAY_* and PORT environment variables")
        raise typer.Exit(code=1)

    config = replace(
        config,
        host=host or config.host,
        port=port if port is not None else config.port,
        log_level=(log_level or config.log_level).upper(),
    )
    console.print(f"[bold]SCP relay[/bold] on http://{config.host}:{config.port} (WebSocket at /ws)")
    uvicorn.run(create_app(config), host=config.host, port=config.port, log_level=config.log_level.lower())
