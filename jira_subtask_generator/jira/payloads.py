"""Request bodies for the Jira REST API v3."""

from typing import Any

from jira_subtask_generator.models import JiraIssueType, Subtask


def format_estimate(hours: float) -> str:
    """Format an hour estimate as a Jira duration string.

    Whole numbers drop the fractional part: ``2.0`` -> ``"2h"``.
    """
    value = int(hours) if float(hours).is_integer() else hours
    return f"{value}h"


def build_adf_document(text: str) -> dict[str, Any]:
    """Wrap plain text into an Atlassian Document Format document.

    The text becomes a single paragraph. Jira rejects empty text nodes,
    so an empty string yields an empty paragraph.
    """
    paragraph: dict[str, Any] = {"type": "paragraph", "content": []}
    if text:
        paragraph["content"].append({"type": "text", "text": text})

    return {
        "type": "doc",
        "version": 1,
        "content": [paragraph],
    }


def build_subtask_payload(
    project_key: str,
    parent_key: str,
    issue_type: JiraIssueType,
    subtask: Subtask,
) -> dict[str, Any]:
    """Build the create-issue body for one subtask."""
    return {
        "fields": {
            "project": {"key": project_key},
            "parent": {"key": parent_key},
            "summary": subtask.title,
            "description": build_adf_document(subtask.description),
            "issuetype": {"id": issue_type.id},
            "timetracking": {
                "originalEstimate": format_estimate(subtask.estimated_hours),
            },
        }
    }
