"""Server middleware."""
from scp_relay.server.middleware.logging import RequestLoggingMiddleware

__all__ = ["RequestLoggingMiddleware"]
