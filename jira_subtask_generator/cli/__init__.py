"""Command line interface."""

from jira_subtask_generator.cli.commands import cli, main

__all__ = ["cli", "main"]
