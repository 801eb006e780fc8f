"""Jira REST API response models."""

from pydantic import BaseModel, ConfigDict, Field


class JiraIssueType(BaseModel):
    """Issue type as returned by ``/rest/api/3/issuetype/project``."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str = Field(description="Issue type identifier")
    name: str = Field(default="", description="Display name")
    is_subtask: bool = Field(
        default=False,
        alias="subtask",
        description="Whether issues of this type are subtasks",
    )


class JiraProjectInfo(BaseModel):
    """Project as returned by ``/rest/api/3/project/{key}``."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(description="Numeric project identifier")
    key: str | None = Field(default=None, description="Project key")
    name: str | None = Field(default=None, description="Project name")


class CreatedIssue(BaseModel):
    """Response body of a successful issue creation."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str | None = Field(default=None, description="Issue identifier")
    key: str = Field(default="Unknown", description="Issue key, e.g. PROJ-42")
    url: str | None = Field(default=None, alias="self", description="REST URL")
