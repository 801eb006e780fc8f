"""Sequential subtask creation.

Subtasks are created one at a time in the order they appear in the batch,
so the issues show up under the parent in source order.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime

from jira_subtask_generator.config import Settings
from jira_subtask_generator.exceptions import (
    JiraSubtaskGeneratorError,
    NoSubtaskIssueTypeError,
)
from jira_subtask_generator.jira import JiraClient, format_estimate
from jira_subtask_generator.models import JiraIssueType, Subtask, SubtaskBatch
from jira_subtask_generator.utils import get_logger

logger = get_logger(__name__)


@dataclass
class SubtaskOutcome:
    """Result of creating a single subtask."""

    subtask: Subtask
    issue_key: str | None = None
    error: str | None = None
    skipped: bool = False

    @property
    def created(self) -> bool:
        """Whether the issue was created."""
        return self.issue_key is not None


@dataclass
class CreationResult:
    """Result of creating all subtasks of a batch."""

    project_key: str
    parent_key: str
    issue_type: JiraIssueType | None = None
    outcomes: list[SubtaskOutcome] = field(default_factory=list)
    start_time: datetime | None = None
    end_time: datetime | None = None

    @property
    def created_count(self) -> int:
        return sum(1 for o in self.outcomes if o.created)

    @property
    def failed_count(self) -> int:
        return sum(1 for o in self.outcomes if o.error is not None)

    @property
    def skipped_count(self) -> int:
        return sum(1 for o in self.outcomes if o.skipped)

    @property
    def success(self) -> bool:
        """Whether every subtask was created."""
        return self.failed_count == 0 and self.skipped_count == 0

    @property
    def duration_seconds(self) -> float | None:
        """Total execution duration in seconds."""
        if self.start_time is None or self.end_time is None:
            return None
        return (self.end_time - self.start_time).total_seconds()


# Called after each successful creation with (subtask, issue_key)
CreatedCallback = Callable[[Subtask, str], None]


class SubtaskCreator:
    """Creates the subtasks of a batch through a Jira client."""

    def __init__(self, client: JiraClient, settings: Settings | None = None):
        """Initialize creator.

        Args:
            client: Open Jira client.
            settings: Application settings.
        """
        self.client = client
        self.settings = settings

    async def resolve_subtask_issue_type(self, project_key: str) -> JiraIssueType:
        """Pick the subtask issue type for a project.

        The first subtask-capable type Jira returns is used.

        Raises:
            NoSubtaskIssueTypeError: If the project has none.
        """
        issue_types = await self.client.get_subtask_issue_types(project_key)
        if not issue_types:
            raise NoSubtaskIssueTypeError(
                f"No subtask issue type found for project {project_key}",
                details={"project_key": project_key},
            )

        issue_type = issue_types[0]
        logger.info(f"Using subtask issue type: {issue_type.name} ({issue_type.id})")
        return issue_type

    async def create_all(
        self,
        batch: SubtaskBatch,
        *,
        fail_fast: bool | None = None,
        on_created: CreatedCallback | None = None,
    ) -> CreationResult:
        """Create every subtask of the batch, in order.

        Args:
            batch: Parsed subtask batch.
            fail_fast: Stop on first failure (overrides settings).
            on_created: Callback after each created issue.

        Returns:
            CreationResult with one outcome per subtask.

        Raises:
            NoSubtaskIssueTypeError: If the project has no subtask issue type.
        """
        if fail_fast is None:
            fail_fast = self.settings.batch.fail_fast if self.settings else True

        result = CreationResult(
            project_key=batch.project_key,
            parent_key=batch.parent_key,
            start_time=datetime.now(),
        )
        result.issue_type = await self.resolve_subtask_issue_type(batch.project_key)

        stop = False
        for subtask in batch.subtasks:
            if stop:
                result.outcomes.append(SubtaskOutcome(subtask=subtask, skipped=True))
                continue

            try:
                issue = await self.client.create_subtask(
                    batch.project_key,
                    result.issue_type,
                    batch.parent_key,
                    subtask,
                )
            except JiraSubtaskGeneratorError as e:
                logger.error(f"Failed to create subtask '{subtask.title}': {e.message}")
                result.outcomes.append(SubtaskOutcome(subtask=subtask, error=e.message))
                stop = fail_fast
                continue

            logger.info(f"Created subtask: {issue.key} for '{subtask.title}'")
            result.outcomes.append(SubtaskOutcome(subtask=subtask, issue_key=issue.key))
            if on_created:
                on_created(subtask, issue.key)

        result.end_time = datetime.now()
        logger.info(
            f"Subtask creation finished: {result.created_count} created, "
            f"{result.failed_count} failed, {result.skipped_count} skipped"
        )
        return result


def preview(batch: SubtaskBatch) -> list[str]:
    """Describe what a real run would create, without calling Jira."""
    return [
        f"[Dry Run] Would create subtask: '{s.title}' - {format_estimate(s.estimated_hours)}"
        for s in batch.subtasks
    ]
