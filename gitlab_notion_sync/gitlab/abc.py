"""Base ABC for issue tracker clients."""

from abc import ABC, abstractmethod

from gitlab_notion_sync.schemas.gitlab import GitLabIssue, GitLabLabel, GitLabMilestone


class TrackerClientBase(ABC):
    """Base ABC for issue tracker clients."""

    @abstractmethod
    async def list_issues(self, page: int, per_page: int) -> list[GitLabIssue]:
        """List a single page of issues for a project, in ascending order."""
        pass

    @abstractmethod
    async def list_labels(self) -> list[GitLabLabel]:
        """List all labels available to a project."""
        pass

    @abstractmethod
    async def list_milestones(self) -> list[GitLabMilestone]:
        """List all milestones of a project."""
        pass
