"""Command-line interface for check-ai."""
