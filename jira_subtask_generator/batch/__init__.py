"""Subtask batch processing module.

This module provides functionality for parsing subtask files and creating
the parsed subtasks in Jira.
"""

from jira_subtask_generator.batch.executor import (
    CreationResult,
    SubtaskCreator,
    SubtaskOutcome,
    preview,
)
from jira_subtask_generator.batch.parser import MarkdownParser, ParseResult, try_parse

__all__ = [
    # Parser
    "MarkdownParser",
    "ParseResult",
    "try_parse",
    # Executor
    "SubtaskCreator",
    "SubtaskOutcome",
    "CreationResult",
    "preview",
]
