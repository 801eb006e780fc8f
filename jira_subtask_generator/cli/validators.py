"""Input validators for the CLI.

These raise package exceptions instead of ``click.BadParameter`` so that
the command can map them onto its own exit codes.
"""

from pathlib import Path

import yaml

from jira_subtask_generator.exceptions import ConfigurationError, InputFileError


def validate_config_file(value: Path | None) -> Path | None:
    """Validate configuration file.

    Args:
        value: Path value to validate

    Returns:
        Validated path or None

    Raises:
        ConfigurationError: If validation fails
    """
    if value is None:
        return None

    if not value.exists():
        raise ConfigurationError(f"Config file does not exist: {value}")

    if not value.is_file():
        raise ConfigurationError(f"Config path is not a file: {value}")

    if value.suffix.lower() not in {".yaml", ".yml"}:
        raise ConfigurationError(f"Config file must be YAML format: {value}")

    try:
        with open(value, encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in config file: {e}") from None

    if config is None:
        raise ConfigurationError(f"Config file is empty: {value}")

    return value


def validate_subtask_file(value: Path | None) -> Path:
    """Validate the subtask file argument.

    Args:
        value: Path value to validate

    Returns:
        Validated path

    Raises:
        InputFileError: If no path was given or it is not a readable file
    """
    if value is None:
        raise InputFileError("Valid markdown file path is required. Use --file [path]")

    if not value.exists():
        raise InputFileError(f"Subtask file does not exist: {value}")

    if not value.is_file():
        raise InputFileError(f"Subtask path is not a file: {value}")

    return value
