"""Async HTTP client for the Jira Cloud REST API.

Usage:
    config = JiraClientConfig(base_url="https://acme.atlassian.net",
                              email="me@acme.com", api_token="...")
    async with JiraClient(config) as jira:
        issue_types = await jira.get_subtask_issue_types("PROJ")
        issue = await jira.create_subtask("PROJ", issue_types[0], "PROJ-1", subtask)
"""

import asyncio
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

import httpx

from jira_subtask_generator.config import JiraSettings
from jira_subtask_generator.exceptions import JiraApiError, JiraConnectionError
from jira_subtask_generator.jira.payloads import build_subtask_payload
from jira_subtask_generator.models import (
    CreatedIssue,
    JiraIssueType,
    JiraProjectInfo,
    Subtask,
)
from jira_subtask_generator.utils.logger import get_logger, register_secret

logger = get_logger(__name__)

API_PREFIX = "/rest/api/3"
RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}


@dataclass
class JiraClientConfig:
    """Configuration for the Jira client.

    Attributes:
        base_url: Jira Cloud site URL
        email: Account email for basic auth
        api_token: API token for basic auth
        timeout: Request timeout in seconds
        retry_count: Number of retries for read requests
        retry_delay: Base delay between retries in seconds
    """

    base_url: str
    email: str
    api_token: str
    timeout: int = 30
    retry_count: int = 3
    retry_delay: float = 1.0

    def __post_init__(self) -> None:
        """Validate configuration."""
        if not self.base_url:
            raise ValueError("Jira base URL is required")
        if not self.email or not self.api_token:
            raise ValueError("Jira email and API token are required")
        if self.timeout <= 0:
            raise ValueError("Timeout must be positive")
        if self.retry_count < 0:
            raise ValueError("Retry count must be non-negative")

    @classmethod
    def from_settings(cls, settings: JiraSettings) -> "JiraClientConfig":
        """Create client config from Jira settings."""
        return cls(
            base_url=settings.url,
            email=settings.email,
            api_token=settings.token,
            timeout=settings.timeout,
            retry_count=settings.retry_count,
            retry_delay=settings.retry_delay,
        )


class JiraClient:
    """Async client for the Jira endpoints needed to create subtasks."""

    def __init__(
        self,
        config: JiraClientConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize client.

        Args:
            config: Client configuration
            transport: Optional httpx transport (used by tests)
        """
        self.config = config
        self._transport = transport
        register_secret(config.api_token)
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "JiraClient":
        """Enter async context."""
        self._client = httpx.AsyncClient(
            base_url=self.config.base_url.rstrip("/"),
            auth=httpx.BasicAuth(self.config.email, self.config.api_token),
            headers={"Accept": "application/json"},
            timeout=httpx.Timeout(self.config.timeout),
            transport=self._transport,
        )
        logger.debug(f"Jira client opened for {self.config.base_url}")
        return self

    async def __aexit__(self, *args) -> None:
        """Exit async context."""
        if self._client:
            await self._client.aclose()
            self._client = None

    def _require_client(self) -> httpx.AsyncClient:
        if not self._client:
            raise JiraConnectionError("Client not initialized. Use 'async with' context.")
        return self._client

    async def _get_json(self, path: str, params: dict[str, str] | None = None) -> Any:
        """GET a JSON resource, retrying transient failures.

        Raises:
            JiraApiError: On a non-retryable error response or when retries run out
        """
        client = self._require_client()
        attempts = self.config.retry_count + 1
        last_error = ""

        for attempt in range(attempts):
            try:
                response = await client.get(path, params=params)
            except httpx.TransportError as e:
                last_error = str(e)
                logger.warning(f"GET {path} failed (attempt {attempt + 1}/{attempts}): {e}")
            else:
                if response.is_success:
                    return response.json()
                if response.status_code not in RETRYABLE_STATUS_CODES:
                    raise self._api_error(f"GET {path}", response)
                last_error = f"HTTP {response.status_code}"
                logger.warning(
                    f"GET {path} returned {response.status_code} "
                    f"(attempt {attempt + 1}/{attempts})"
                )

            if attempt < self.config.retry_count:
                delay = self.config.retry_delay * (2**attempt)
                logger.debug(f"Retrying in {delay} seconds...")
                await asyncio.sleep(delay)

        raise JiraApiError(
            f"GET {path} failed after {attempts} attempts",
            details={"last_error": last_error},
        )

    @staticmethod
    def _api_error(action: str, response: httpx.Response) -> JiraApiError:
        logger.error(f"Jira API Error: {response.status_code} - {response.text}")
        return JiraApiError(
            f"{action} failed with HTTP {response.status_code}",
            status_code=response.status_code,
            body=response.text,
        )

    async def get_project(self, project_key: str) -> JiraProjectInfo:
        """Get project details by key."""
        data = await self._get_json(f"{API_PREFIX}/project/{quote(project_key, safe='')}")
        return JiraProjectInfo.model_validate(data)

    async def get_issue_types_for_project(self, project_id: str) -> list[JiraIssueType]:
        """Get all issue types available in a project."""
        data = await self._get_json(
            f"{API_PREFIX}/issuetype/project",
            params={"projectId": project_id},
        )
        return [JiraIssueType.model_validate(item) for item in data or []]

    async def get_subtask_issue_types(self, project_key: str) -> list[JiraIssueType]:
        """Get subtask-capable issue types of a project, in server order."""
        project = await self.get_project(project_key)
        issue_types = await self.get_issue_types_for_project(project.id)
        subtask_types = [t for t in issue_types if t.is_subtask]
        logger.debug(
            f"Project {project_key} ({project.id}): {len(issue_types)} issue types, "
            f"{len(subtask_types)} subtask types"
        )
        return subtask_types

    async def create_subtask(
        self,
        project_key: str,
        issue_type: JiraIssueType,
        parent_key: str,
        subtask: Subtask,
    ) -> CreatedIssue:
        """Create one subtask under the parent issue.

        Not retried: issue creation is not idempotent. A success response
        without a readable key yields an issue keyed "Unknown".

        Raises:
            ValueError: If issue_type is not a subtask type
            JiraApiError: If Jira rejects the request
        """
        if not issue_type.is_subtask:
            raise ValueError("issue_type must be a subtask issue type")

        client = self._require_client()
        payload = build_subtask_payload(project_key, parent_key, issue_type, subtask)

        logger.debug(f"Creating subtask {subtask.title!r} under {parent_key}")
        try:
            response = await client.post(f"{API_PREFIX}/issue", json=payload)
        except httpx.TransportError as e:
            raise JiraApiError(
                f"Failed to create Jira subtask: {e}",
                details={"title": subtask.title},
            ) from e

        if not response.is_success:
            raise self._api_error("Failed to create Jira subtask", response)

        # The issue exists at this point, so an unusable body must not fail the subtask
        try:
            return CreatedIssue.model_validate(response.json())
        except ValueError:
            logger.warning(
                f"Created subtask {subtask.title!r} but could not read the response: "
                f"{response.text[:200]!r}"
            )
            return CreatedIssue()
