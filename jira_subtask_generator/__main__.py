"""Entry point for running jira_subtask_generator as a module."""

from jira_subtask_generator.cli import cli

if __name__ == "__main__":
    cli()
