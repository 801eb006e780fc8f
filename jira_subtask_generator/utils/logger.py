"""Logging configuration using loguru.

Log records go to stderr, so stdout only carries the dry-run preview and
the run summary. Registered secrets (the Jira API token) are masked in
every record before it reaches a sink.
"""

import sys
from pathlib import Path
from typing import Any

from loguru import logger

from jira_subtask_generator.config.settings import LoggingSettings

MASK = "****"
# Shorter values would mask ordinary words
MIN_SECRET_LENGTH = 4

FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[name]}:{function}:{line} | {message}"
)

_secrets: set[str] = set()
_logger_configured = False


def _mask_secrets(record: dict[str, Any]) -> None:
    for secret in _secrets:
        if secret in record["message"]:
            record["message"] = record["message"].replace(secret, MASK)


def register_secret(value: str | None) -> None:
    """Mask ``value`` in all log output from now on."""
    if value and len(value) >= MIN_SECRET_LENGTH:
        _secrets.add(value)


def level_from_flags(verbose: bool = False, quiet: bool = False) -> str | None:
    """Map the CLI's --verbose/--quiet flags to a console level.

    Returns None when neither is set, leaving the configured level in effect.
    --verbose wins when both are given.
    """
    if verbose:
        return "DEBUG"
    if quiet:
        return "WARNING"
    return None


def setup_logger(
    level: str = "INFO",
    logging_settings: LoggingSettings | None = None,
) -> Any:
    """Replace all sinks with a stderr sink and an optional file sink.

    Args:
        level: Console level
        logging_settings: Console format and file sink options (defaults when None)

    Returns:
        Configured logger instance
    """
    global _logger_configured

    options = logging_settings or LoggingSettings()

    logger.remove()
    logger.configure(extra={"name": "jira_subtask_generator"}, patcher=_mask_secrets)

    logger.add(
        sys.stderr,
        level=level.upper(),
        format=options.console_format,
        colorize=True,
    )

    if options.file:
        log_path = Path(options.file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        logger.add(
            str(log_path),
            level="DEBUG",  # File always captures DEBUG level
            format=FILE_FORMAT,
            rotation=options.rotation,
            retention=options.retention,
            compression="zip" if options.compression else None,
            encoding="utf-8",
        )

    _logger_configured = True
    return logger


def get_logger(name: str | None = None) -> Any:
    """Get a logger, bound to a module name when given."""
    if not _logger_configured:
        setup_logger()

    if name:
        return logger.bind(name=name)
    return logger


def configure_from_settings(settings: Any, log_level: str | None = None) -> Any:
    """Configure logging from Settings and mask its Jira token.

    Args:
        settings: Settings object
        log_level: Level overriding ``settings.logging.level``

    Returns:
        Configured logger instance
    """
    register_secret(settings.jira.token)
    return setup_logger(log_level or settings.logging.level, settings.logging)
