"""Data models module."""

from jira_subtask_generator.models.jira import (
    CreatedIssue,
    JiraIssueType,
    JiraProjectInfo,
)
from jira_subtask_generator.models.subtask import Subtask, SubtaskBatch

__all__ = [
    # Batch models
    "Subtask",
    "SubtaskBatch",
    # Jira models
    "JiraIssueType",
    "JiraProjectInfo",
    "CreatedIssue",
]
