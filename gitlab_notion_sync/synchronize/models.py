"""Internal data models passed between the stages of the sync pipeline."""

from dataclasses import dataclass
from enum import Enum

from gitlab_notion_sync.schemas.gitlab import GitLabIssue


class SyncDecision(Enum):
    """Enum for sync decisions."""

    CREATE = "create"
    UPDATE = "update"


class SyncStage(Enum):
    """Stages of a sync run, in the order they are entered."""

    IDLE = "idle"
    BUILDING_INDEX = "building_index"
    LISTING = "listing"
    SYNCING_TAXONOMY = "syncing_taxonomy"
    RECONCILING = "reconciling"
    WRITING_CREATES = "writing_creates"
    WRITING_UPDATES = "writing_updates"
    DONE = "done"


@dataclass(frozen=True)
class DestinationRecord:
    """A Notion page whose identity property resolved to a GitLab issue IID."""

    handle: str
    local_id: int


@dataclass(frozen=True)
class CreatePage:
    """Work item creating a Notion page for an issue not yet mirrored."""

    issue: GitLabIssue

    @property
    def decision(self) -> SyncDecision:
        """Decision this work item carries out."""
        return SyncDecision.CREATE


@dataclass(frozen=True)
class UpdatePage:
    """Work item overwriting the Notion page that already mirrors an issue."""

    handle: str
    issue: GitLabIssue

    @property
    def decision(self) -> SyncDecision:
        """Decision this work item carries out."""
        return SyncDecision.UPDATE


WorkItem = CreatePage | UpdatePage
