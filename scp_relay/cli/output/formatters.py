"""Rich terminal output formatters."""

from typing import Any

from rich.console import Console


def format_success(console: Console, message: str) -> None:
    """Display success message in green."""
    console.print(f"[green]{message}[/green]")


def format_error(console: Console, message: str, hint: str | None = None) -> None:
    """Display error message in red with optional hint."""
    console.print(f"[red]Error:[/red] {message}")
    if hint:
        console.print(f"[yellow]Hint:[/yellow] {hint}")


def format_key_value(console: Console, data: dict[str, Any]) -> None:
    """Display key-value pairs."""
    max_key_len = max(len(k) for k in data.keys()) if data else 0
    for key, value in data.items():
        console.print(f"[cyan]{key.ljust(max_key_len)}[/cyan]: {value}", highlight=False)
