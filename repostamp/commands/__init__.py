"""CLI commands for repostamp."""
