"""CLI utilities."""

from .client import DEFAULT_RELAY_URL, RelayClient, RelayClientError, default_relay_url

__all__ = ["DEFAULT_RELAY_URL", "RelayClient", "RelayClientError", "default_relay_url"]
