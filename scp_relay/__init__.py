"""SCP Relay - pairs an SCP server with its clients using short session codes."""

__version__ = "0.1.0"
