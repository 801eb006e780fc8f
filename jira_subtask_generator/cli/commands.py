"""CLI command for jira_subtask_generator."""

from pathlib import Path

import click

from jira_subtask_generator import __version__
from jira_subtask_generator.cli.runner import ExitCode, SubtaskRunner
from jira_subtask_generator.cli.validators import validate_config_file, validate_subtask_file
from jira_subtask_generator.exceptions import ConfigurationError, InputFileError

# Context settings for better help formatting
CONTEXT_SETTINGS = {
    "help_option_names": ["-h", "--help"],
    "max_content_width": 120,
}

README_TEXT = """\
Jira Subtask Generator
======================

Creates Jira subtasks under an existing issue from a plain-text file.

File format
-----------
The first line names the project and the parent issue:

    @PROJ:STORY-123

Every line of the form "## <title> || <hours>" starts a new subtask. The
hours must be a whole number. Lines below a section marker become the
description of that subtask, until the next marker or the end of the file.

    @PROJ:STORY-123
    ## Write the migration || 3
    Add the new column and backfill it.
    ## Review || 1

Configuration
-------------
Set JIRA_URL, JIRA_EMAIL and JIRA_TOKEN, or pass a YAML file with --config:

    jira:
      url: https://your-site.atlassian.net
      email: you@example.com
      token: <api token>

Without --config, JIRA_SUBTASK_GENERATOR_CONFIG names the file; otherwise
./jira-subtask-generator.yaml or ~/.jira_subtask_generator/config.yaml is used
if it exists. A dry run needs no credentials.

Exit codes
----------
    0  success
    1  missing or invalid input (config or file)
    2  no subtask issue type found for the project
    3  unexpected error while creating subtasks
"""


def _load_settings(config: Path | None, include_credentials: bool = True):
    """Load settings from the given or discovered config file and the environment."""
    from jira_subtask_generator.config import find_config_file, load_config

    config_path = validate_config_file(config) if config else find_config_file()
    return load_config(config_path, include_credentials=include_credentials)


@click.command(context_settings=CONTEXT_SETTINGS)
@click.option(
    "--file",
    "-f",
    "file_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Subtask file to process",
)
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="Parse the file and preview subtasks without calling Jira",
)
@click.option(
    "--config",
    "-c",
    type=click.Path(dir_okay=False, path_type=Path),
    help="YAML config file (instead of JIRA_URL, JIRA_EMAIL, JIRA_TOKEN)",
)
@click.option(
    "--readme",
    is_flag=True,
    default=False,
    help="Show the file format and configuration guide",
)
@click.option(
    "--continue-on-error",
    is_flag=True,
    default=False,
    help="Keep creating subtasks after a failure",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Enable verbose output",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    default=False,
    help="Suppress non-essential output",
)
@click.version_option(version=__version__, prog_name="jira-subtask-generator")
@click.pass_context
def cli(
    ctx: click.Context,
    file_path: Path | None,
    dry_run: bool,
    config: Path | None,
    readme: bool,
    continue_on_error: bool,
    verbose: bool,
    quiet: bool,
) -> None:
    """Jira Subtask Generator - create Jira subtasks from a text file

    \b
    Examples:
        # Preview what would be created
        jira-subtask-generator --file subtasks.md --dry-run

        # Create subtasks using credentials from the environment
        jira-subtask-generator --file subtasks.md

        # Create subtasks using a config file
        jira-subtask-generator --file subtasks.md --config jira.yaml
    """
    if readme:
        click.echo(README_TEXT)
        return

    from jira_subtask_generator.utils.logger import (
        configure_from_settings,
        level_from_flags,
        setup_logger,
    )

    log_level = level_from_flags(verbose, quiet)
    setup_logger(log_level or "INFO")

    try:
        # Dry runs load no Jira credentials
        settings = _load_settings(config, include_credentials=not dry_run)
    except ConfigurationError as e:
        click.echo(click.style(f"✗ {e.message}", fg="red"), err=True)
        ctx.exit(ExitCode.INVALID_INPUT)

    configure_from_settings(settings, log_level=log_level)

    try:
        file_path = validate_subtask_file(file_path)
    except InputFileError as e:
        click.echo(click.style(f"✗ {e.message}", fg="red"), err=True)
        ctx.exit(ExitCode.INVALID_INPUT)

    runner = SubtaskRunner(settings=settings, quiet=quiet)
    exit_code = runner.run(
        file_path,
        dry_run=dry_run,
        fail_fast=False if continue_on_error else None,
    )
    ctx.exit(exit_code)


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
