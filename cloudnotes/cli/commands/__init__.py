"""Command modules for the cloudnotes CLI."""

from cloudnotes.cli.commands import auth, notes

__all__ = ["auth", "notes"]
