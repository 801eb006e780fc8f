"""Configuration management module."""

from jira_subtask_generator.config.loader import find_config_file, load_config
from jira_subtask_generator.config.settings import (
    BatchSettings,
    JiraSettings,
    LoggingSettings,
    Settings,
)

__all__ = [
    "Settings",
    "JiraSettings",
    "BatchSettings",
    "LoggingSettings",
    "load_config",
    "find_config_file",
]
