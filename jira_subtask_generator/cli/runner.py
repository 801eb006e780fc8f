"""CLI runner module for parsing subtask files and creating the subtasks.

This module sits between the click command and the parser, Jira client
and subtask creator, and maps outcomes onto process exit codes.
"""

import asyncio
from enum import IntEnum
from pathlib import Path

import click

from jira_subtask_generator.batch import CreationResult, MarkdownParser, SubtaskCreator, preview
from jira_subtask_generator.config import Settings
from jira_subtask_generator.exceptions import (
    ConfigurationError,
    InputFileError,
    NoSubtaskIssueTypeError,
)
from jira_subtask_generator.jira import JiraClient, JiraClientConfig
from jira_subtask_generator.models import SubtaskBatch
from jira_subtask_generator.utils.logger import get_logger

logger = get_logger(__name__)


class ExitCode(IntEnum):
    """Process exit codes."""

    SUCCESS = 0
    INVALID_INPUT = 1
    NO_SUBTASK_TYPE = 2
    UNEXPECTED_ERROR = 3


class SubtaskRunner:
    """Runs one parse-and-create pass over a subtask file."""

    def __init__(
        self,
        settings: Settings,
        quiet: bool = False,
        parser: MarkdownParser | None = None,
    ):
        """Initialize runner.

        Args:
            settings: Application settings
            quiet: Suppress non-essential output
            parser: Parser to use (default parser when None)
        """
        self.settings = settings
        self.quiet = quiet
        self.parser = parser or MarkdownParser()

    def load_batch(self, file_path: Path) -> SubtaskBatch:
        """Parse the subtask file.

        Raises:
            InputFileError: If the file cannot be read or is not a valid batch
        """
        try:
            success, batch = self.parser.parse_file(file_path)
        except FileNotFoundError as e:
            raise InputFileError(str(e)) from None

        if not success:
            raise InputFileError(
                "Invalid markdown, parsing failed",
                details={"file": str(file_path)},
            )

        logger.info(f"Project: {batch.project_key}, Parent: {batch.parent_key}")
        logger.info(f"Found {len(batch.subtasks)} subtasks.")
        return batch

    def run(
        self,
        file_path: Path,
        dry_run: bool = False,
        fail_fast: bool | None = None,
    ) -> ExitCode:
        """Parse the file and create (or preview) its subtasks.

        Args:
            file_path: Subtask file
            dry_run: Print a preview instead of calling Jira
            fail_fast: Stop on first failure (overrides settings)

        Returns:
            Exit code for the process
        """
        try:
            batch = self.load_batch(file_path)
        except InputFileError as e:
            logger.error(e.message)
            return ExitCode.INVALID_INPUT

        if dry_run:
            for line in preview(batch):
                click.echo(line)
            return ExitCode.SUCCESS

        try:
            jira_settings = self.settings.require_jira()
        except ConfigurationError as e:
            logger.error(e.message)
            return ExitCode.INVALID_INPUT

        try:
            result = asyncio.run(
                self.create_subtasks(batch, JiraClientConfig.from_settings(jira_settings), fail_fast)
            )
        except NoSubtaskIssueTypeError as e:
            logger.error(e.message)
            return ExitCode.NO_SUBTASK_TYPE
        except Exception:
            logger.exception("Unexpected error occurred.")
            return ExitCode.UNEXPECTED_ERROR

        self._print_summary(result)
        return ExitCode.SUCCESS if result.success else ExitCode.UNEXPECTED_ERROR

    async def create_subtasks(
        self,
        batch: SubtaskBatch,
        client_config: JiraClientConfig,
        fail_fast: bool | None = None,
    ) -> CreationResult:
        """Create all subtasks of the batch in Jira."""
        async with JiraClient(client_config) as client:
            creator = SubtaskCreator(client, settings=self.settings)
            return await creator.create_all(batch, fail_fast=fail_fast)

    def _print_summary(self, result: CreationResult) -> None:
        if self.quiet:
            return

        click.echo(f"Parent: {result.parent_key}")
        for outcome in result.outcomes:
            if outcome.created:
                click.echo(
                    f"  {click.style('✓', fg='green')} {outcome.issue_key} {outcome.subtask.title}"
                )
            elif outcome.skipped:
                click.echo(f"  {click.style('-', fg='yellow')} skipped {outcome.subtask.title}")
            else:
                click.echo(
                    f"  {click.style('✗', fg='red')} {outcome.subtask.title}: {outcome.error}"
                )

        color = "green" if result.success else "red"
        click.echo(
            click.style(
                f"{result.created_count} created, {result.failed_count} failed, "
                f"{result.skipped_count} skipped",
                fg=color,
            )
        )
