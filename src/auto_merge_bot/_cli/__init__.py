"""Command-line interface for auto-merge-bot."""
