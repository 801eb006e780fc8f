"""Subtask batch models produced by the batch parser."""

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Subtask(BaseModel):
    """A single subtask to be created under the parent issue."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(min_length=1, description="Issue summary")
    description: str = Field(
        default="",
        description="Free text body, line terminators preserved",
    )
    estimated_hours: float = Field(
        default=0.0,
        ge=0.0,
        description="Original time estimate in hours",
    )


class SubtaskBatch(BaseModel):
    """Parsed batch: target project, parent issue and ordered subtasks.

    A batch is either valid (both keys set) or the empty sentinel
    returned by a failed parse (both keys empty, no subtasks).
    """

    model_config = ConfigDict(frozen=True)

    project_key: str = Field(
        default="",
        pattern=r"^[A-Za-z0-9]*$",
        description="Jira project key",
    )
    parent_key: str = Field(
        default="",
        pattern=r"^[A-Za-z0-9-]*$",
        description="Parent issue key",
    )
    subtasks: tuple[Subtask, ...] = Field(
        default=(),
        description="Subtasks in order of appearance",
    )

    @model_validator(mode="after")
    def check_sentinel_or_valid(self) -> "SubtaskBatch":
        """Reject partially populated batches."""
        if self.project_key and self.parent_key:
            return self
        if not self.project_key and not self.parent_key and not self.subtasks:
            return self
        raise ValueError(
            "project_key and parent_key must both be set, "
            "or the batch must be completely empty"
        )

    @classmethod
    def empty(cls) -> "SubtaskBatch":
        """Return the canonical empty batch."""
        return cls()

    @property
    def is_empty(self) -> bool:
        """Check if this is the empty sentinel batch."""
        return not self.project_key

    @property
    def total_hours(self) -> float:
        """Sum of all subtask estimates."""
        return sum(s.estimated_hours for s in self.subtasks)

    def __len__(self) -> int:
        return len(self.subtasks)
