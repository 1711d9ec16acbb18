"""Main CLI entry point for the SCP relay."""

import typer
from rich.console import Console

from scp_relay.cli.commands.ack import ack_command
from scp_relay.cli.commands.serve import serve_command
from scp_relay.cli.commands.sessions import check_command, create_command, health_command
from scp_relay.cli.utils import default_relay_url

app = typer.Typer(
    name="scp-relay",
    help="SCP Relay - pair an SCP server with its clients",
    no_args_is_help=True,
    add_completion=False,
)
console = Console()


@app.command("serve")
def serve(
    host: str = typer.Option(None, "-H", "--host", help="Bind address (default: RELAY_HOST)"),
    port: int = typer.Option(None, "-p", "--port", help="Port (default: PORT or 3001)"),
    log_level: str = typer.Option(None, "-l", "--log-level", help="Log level"),
) -> None:
    """Run the relay server."""
    serve_command(host, port, log_level)


@app.command("create")
def create(
    url: str = typer.Option(None, "-u", "--url", help="Relay base URL (default: RELAY_URL)"),
    json_flag: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Create a new session on a running relay."""
    create_command(url or default_relay_url(), json_flag)


@app.command("check")
def check(
    code: str = typer.Argument(..., help="Session code"),
    url: str = typer.Option(None, "-u", "--url", help="Relay base URL (default: RELAY_URL)"),
    json_flag: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Check whether a session code is live."""
    check_command(code, url or default_relay_url(), json_flag)


@app.command("health")
def health(
    url: str = typer.Option(None, "-u", "--url", help="Relay base URL (default: RELAY_URL)"),
    json_flag: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show relay health."""
    health_command(url or default_relay_url(), json_flag)


@app.command("ack")
def ack(
    text: str = typer.Argument(..., help="SCP record, e.g. 'SCP/1.1 | MSG | id=0 | hi'"),
    json_flag: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Print the acknowledgment the relay would synthesize for a record."""
    ack_command(text, json_flag)


def main() -> None:
    """Entry point."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Cancelled[/yellow]")
        raise typer.Exit(130)
