"""Formatting helpers shared by the CLI."""
