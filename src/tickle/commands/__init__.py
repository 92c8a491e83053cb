"""Subcommands discovered by the CLI."""
