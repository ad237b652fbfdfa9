"""Command implementations for the subexec CLI."""
