"""Utility modules for jira_subtask_generator."""

from jira_subtask_generator.utils.logger import (
    configure_from_settings,
    get_logger,
    level_from_flags,
    register_secret,
    setup_logger,
)

__all__ = [
    "setup_logger",
    "get_logger",
    "configure_from_settings",
    "level_from_flags",
    "register_secret",
]
