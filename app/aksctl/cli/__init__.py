"""Command-line interface for aksctl."""
