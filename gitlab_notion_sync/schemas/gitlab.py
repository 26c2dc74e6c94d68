"""Pydantic schemas for the GitLab REST API payloads consumed by the sync."""

from pydantic import BaseModel, ConfigDict


class GitLabUser(BaseModel):
    """Pydantic model for a GitLab user reference (assignee, author)."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str
    username: str | None = None


class GitLabIssue(BaseModel):
    """Pydantic model for a GitLab project issue.

    Only ``iid`` is required at the API boundary. The remaining fields are
    checked when the issue is mapped onto the Notion schema, so that a single
    malformed issue fails on its own instead of failing the whole listing.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    iid: int
    id: int | None = None
    title: str | None = None
    description: str | None = None
    state: str | None = None
    assignees: tuple[GitLabUser, ...] = ()
    labels: tuple[str, ...] = ()
    updated_at: str | None = None
    web_url: str | None = None

    def is_assigned_to(self, name: str) -> bool:
        """Return True if at least one assignee carries the given display name."""
        return any(assignee.name == name for assignee in self.assignees)


class GitLabLabel(BaseModel):
    """Pydantic model for a GitLab project label."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str
    id: int | None = None
    color: str | None = None
    description: str | None = None


class GitLabMilestone(BaseModel):
    """Pydantic model for a GitLab project milestone."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int
    iid: int | None = None
    title: str
    state: str | None = None
    due_date: str | None = None
    web_url: str | None = None
