"""Relay server: HTTP control plane, WebSocket transport and forwarding."""
