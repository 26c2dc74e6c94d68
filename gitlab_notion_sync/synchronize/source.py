"""Lists the GitLab issues that are mirrored into Notion."""

import time

import structlog

from gitlab_notion_sync.gitlab.abc import TrackerClientBase
from gitlab_notion_sync.schemas.gitlab import GitLabIssue, GitLabLabel
from gitlab_notion_sync.utils.constants import DEFAULT_PAGE_SIZE

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


async def list_source_issues(
    tracker: TrackerClientBase,
    assignee_name: str,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> list[GitLabIssue]:
    """Fetch every project issue assigned to the given person, in ascending order.

    Pages are requested one after another starting at page 1. A page holding
    fewer than ``page_size`` issues ends the listing, so a collection whose size
    is an exact multiple of the page size costs one extra, empty request. Each
    page is filtered before it is accumulated.
    """
    start_time = time.time()
    issues: list[GitLabIssue] = []
    page = 1
    while True:
        batch = await tracker.list_issues(page=page, per_page=page_size)
        matching = [issue for issue in batch if issue.is_assigned_to(assignee_name)]
        issues.extend(matching)
        logger.debug("Fetched page of GitLab issues", page=page, page_issue_count=len(batch), matching_issue_count=len(matching))
        if len(batch) < page_size:
            break
        page += 1

    logger.info(
        "Fetched issues from GitLab project",
        issue_count=len(issues),
        page_count=page,
        assignee_name=assignee_name,
        duration=round(time.time() - start_time, 2),
    )
    return issues


async def list_source_label_names(tracker: TrackerClientBase) -> list[str]:
    """Fetch the names of all project labels, in the order GitLab returns them."""
    labels: list[GitLabLabel] = await tracker.list_labels()
    logger.info("Fetched labels from GitLab project", label_count=len(labels))
    return [label.name for label in labels]
