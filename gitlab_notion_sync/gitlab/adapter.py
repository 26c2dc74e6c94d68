"""GitLab client adapter over the GitLab REST API v4."""

from typing import Any, Self, TypeVar

import httpx
import structlog
from pydantic import BaseModel, TypeAdapter, ValidationError

from gitlab_notion_sync.exceptions import TransportError
from gitlab_notion_sync.schemas.gitlab import GitLabIssue, GitLabLabel, GitLabMilestone
from gitlab_notion_sync.utils.constants import DEFAULT_PAGE_SIZE
from gitlab_notion_sync.utils.http import HTTPAdapterBase

from .abc import TrackerClientBase
from .client import get_gitlab_client

logger = structlog.get_logger(__name__)

M = TypeVar("M", bound=BaseModel)


class GitLabAdapter(HTTPAdapterBase, TrackerClientBase):
    """GitLab client adapter scoped to a single project."""

    @classmethod
    def create(
        cls,
        gitlab_domain: str,
        gitlab_project_id: str,
        gitlab_token: str,
        max_retries: int = 0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> Self:
        """Create a new GitLab adapter for a project.

        Args:
            gitlab_domain: Host name of the GitLab instance (e.g. gitlab.com)
            gitlab_project_id: Numeric project ID or URL path of the project
            gitlab_token: Personal or project access token
            max_retries: Number of retries for transient failures
            transport: Optional httpx transport, used to stub the network in tests

        Returns:
            Configured GitLabAdapter instance
        """
        logger.info("Creating client for GitLab project", gitlab_domain=gitlab_domain, gitlab_project_id=gitlab_project_id)
        client = get_gitlab_client(gitlab_domain, gitlab_project_id, gitlab_token, transport=transport)
        return cls(client, max_retries=max_retries)

    async def _get_list(self, path: str, model: type[M], params: dict[str, Any]) -> list[M]:
        """GET a JSON array and validate every element against the given model."""
        data = await self._request("GET", path, params=params)
        if not isinstance(data, list):
            raise TransportError(f"GET {path} returned a {type(data).__name__} instead of a list", method="GET", url=path)
        try:
            return TypeAdapter(list[model]).validate_python(data)  # type: ignore[valid-type]
        except ValidationError as exc:
            raise TransportError(f"GET {path} returned malformed {model.__name__} items: {exc}", method="GET", url=path) from exc

    async def _get_all(self, path: str, model: type[M], per_page: int = DEFAULT_PAGE_SIZE) -> list[M]:
        """GET every page of a collection, stopping at the first short page."""
        items: list[M] = []
        page = 1
        while True:
            batch = await self._get_list(path, model, {"page": page, "per_page": per_page})
            items.extend(batch)
            if len(batch) < per_page:
                break
            page += 1
        return items

    async def list_issues(self, page: int, per_page: int = DEFAULT_PAGE_SIZE) -> list[GitLabIssue]:
        """List one page of project issues (all states) in ascending order."""
        params = {
            "scope": "all",
            "pagination": "keyset",
            "sort": "asc",
            "page": page,
            "per_page": per_page,
        }
        return await self._get_list("/issues", GitLabIssue, params)

    async def list_labels(self) -> list[GitLabLabel]:
        """List all labels of the project, including inherited group labels."""
        return await self._get_all("/labels", GitLabLabel)

    async def list_milestones(self) -> list[GitLabMilestone]:
        """List all milestones of the project."""
        return await self._get_all("/milestones", GitLabMilestone)
