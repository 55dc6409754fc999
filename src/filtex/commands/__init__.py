"""CLI commands for filtex."""
