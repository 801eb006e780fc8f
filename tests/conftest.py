"""Pytest configuration and shared fixtures."""

import os
from pathlib import Path

import pytest

JIRA_ENV = ("JIRA_URL", "JIRA_EMAIL", "JIRA_TOKEN")

SAMPLE_MARKDOWN = (
    "@PROJ1:STORY-123\r\n"
    "## Task One || 2\r\n"
    "Some test\r\n"
    "on multiple lines\r\n"
    "## Task Two || 4"
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch, tmp_path_factory: pytest.TempPathFactory):
    """Keep real credentials, overrides and config files out of tests."""
    for name in JIRA_ENV:
        monkeypatch.delenv(name, raising=False)
    for name in list(os.environ):
        if name.startswith("JIRA_SUBTASK_GENERATOR_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path_factory.mktemp("home")))


@pytest.fixture
def jira_env(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set valid Jira credentials in the environment."""
    values = {
        "JIRA_URL": "https://example.atlassian.net",
        "JIRA_EMAIL": "dev@example.com",
        "JIRA_TOKEN": "token-1234567890",
    }
    for name, value in values.items():
        monkeypatch.setenv(name, value)
    return values


@pytest.fixture
def sample_markdown() -> str:
    """Two-subtask batch with CRLF line endings."""
    return SAMPLE_MARKDOWN


@pytest.fixture
def sample_file(tmp_path: Path) -> Path:
    """Write the sample batch to a file, preserving CRLF."""
    path = tmp_path / "subtasks.md"
    path.write_bytes(SAMPLE_MARKDOWN.encode("utf-8"))
    return path


@pytest.fixture
def headerless_file(tmp_path: Path) -> Path:
    """A batch file without a header line."""
    path = tmp_path / "no_header.md"
    path.write_text("## Task One || 2\nDescription\n", encoding="utf-8")
    return path


@pytest.fixture
def sample_config(tmp_path: Path) -> Path:
    """Create a sample configuration file."""
    config_file = tmp_path / "config.yaml"
    config_file.write_text("""
version: "1.0"

jira:
  url: "https://config.atlassian.net"
  email: "config@example.com"
  token: "config-token-123456"
  timeout: 15

batch:
  fail_fast: false
""")
    return config_file
