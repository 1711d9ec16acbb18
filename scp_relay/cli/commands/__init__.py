"""CLI command implementations."""

from .ack import ack_command
from .serve import serve_command
from .sessions import check_command, create_command, health_command

__all__ = [
    "ack_command",
    "check_command",
    "create_command",
    "health_command",
    "serve_command",
]
