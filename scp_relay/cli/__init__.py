"""Command-line interface for the SCP relay."""
