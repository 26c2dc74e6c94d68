"""Classifies GitLab issues into Notion page creates and updates."""

from collections.abc import Mapping, Sequence

import structlog

from gitlab_notion_sync.schemas.gitlab import GitLabIssue
from gitlab_notion_sync.synchronize.models import CreatePage, UpdatePage
from gitlab_notion_sync.synchronize.results import ReconcileResult

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def classify(issues: Sequence[GitLabIssue], index: Mapping[int, str]) -> ReconcileResult:
    """Split issues into pages to create and pages to update.

    An issue whose IID is present in the index updates the page it maps to;
    every other issue creates a page. Both lists keep the order of ``issues``.
    """
    creates: list[CreatePage] = []
    updates: list[UpdatePage] = []
    for issue in issues:
        handle = index.get(issue.iid)
        if handle is None:
            creates.append(CreatePage(issue=issue))
        else:
            updates.append(UpdatePage(handle=handle, issue=issue))

    logger.info("Classified GitLab issues", create_count=len(creates), update_count=len(updates))
    return ReconcileResult(creates, updates)
