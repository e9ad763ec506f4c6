"""Subcommands of the docscope CLI."""
