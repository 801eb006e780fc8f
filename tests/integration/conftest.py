"""Integration test fixtures."""

import functools
import json
from unittest.mock import patch

import httpx
import pytest

from jira_subtask_generator.jira import JiraClient


class FakeJiraServer:
    """In-process Jira Cloud stand-in for the endpoints the CLI uses."""

    def __init__(self):
        self.issue_types = [
            {"id": "10001", "name": "Story", "subtask": False},
            {"id": "10003", "name": "Sub-task", "subtask": True},
        ]
        self.reject_titles: set[str] = set()
        self.missing_projects: set[str] = set()
        self.created: list[dict] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if request.method == "GET" and path.startswith("/rest/api/3/project/"):
            key = path.rsplit("/", 1)[-1]
            if key in self.missing_projects:
                return httpx.Response(404, json={"errorMessages": [f"No project {key}"]})
            return httpx.Response(200, json={"id": "10000", "key": key, "name": key})
        if request.method == "GET" and path == "/rest/api/3/issuetype/project":
            return httpx.Response(200, json=self.issue_types)
        if request.method == "POST" and path == "/rest/api/3/issue":
            fields = json.loads(request.content)["fields"]
            if fields["summary"] in self.reject_titles:
                return httpx.Response(400, json={"errors": {"summary": "rejected"}})
            self.created.append(fields)
            key = f"{fields['project']['key']}-{len(self.created)}"
            return httpx.Response(201, json={"id": str(len(self.created)), "key": key})
        return httpx.Response(404, json={"errorMessages": ["Not found"]})


@pytest.fixture
def fake_jira(jira_env):
    """Route the CLI's Jira client to a fake server."""
    server = FakeJiraServer()
    client_factory = functools.partial(JiraClient, transport=httpx.MockTransport(server.handler))
    with patch("jira_subtask_generator.cli.runner.JiraClient", client_factory):
        yield server
