"""Jira Cloud REST API access."""

from jira_subtask_generator.jira.client import JiraClient, JiraClientConfig
from jira_subtask_generator.jira.payloads import (
    build_adf_document,
    build_subtask_payload,
    format_estimate,
)

__all__ = [
    "JiraClient",
    "JiraClientConfig",
    "build_adf_document",
    "build_subtask_payload",
    "format_estimate",
]
