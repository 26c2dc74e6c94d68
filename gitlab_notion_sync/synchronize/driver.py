"""Orchestrates the synchronization of GitLab issues into a Notion database."""

import time

import httpx
import structlog

from gitlab_notion_sync.configuration.models import SyncConfig, UnparsableIdentityPolicy
from gitlab_notion_sync.gitlab.abc import TrackerClientBase
from gitlab_notion_sync.gitlab.adapter import GitLabAdapter
from gitlab_notion_sync.notion.abc import MirrorStoreClientBase
from gitlab_notion_sync.notion.adapter import NotionAdapter
from gitlab_notion_sync.schemas.gitlab import GitLabIssue
from gitlab_notion_sync.synchronize.destination import list_destination_records
from gitlab_notion_sync.synchronize.identity import IdentityIndex
from gitlab_notion_sync.synchronize.models import SyncStage
from gitlab_notion_sync.synchronize.reconciler import classify
from gitlab_notion_sync.synchronize.results import ReconcileResult, SyncRunResult, WriteSummary
from gitlab_notion_sync.synchronize.source import list_source_issues, list_source_label_names
from gitlab_notion_sync.synchronize.taxonomy import sync_label_options
from gitlab_notion_sync.synchronize.writer import BatchedWriter
from gitlab_notion_sync.utils.constants import DEFAULT_BATCH_SIZE, DEFAULT_PAGE_SIZE

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

_STAGE_ORDER = list(SyncStage)


class SyncPipeline:
    """Runs one reconciliation pass from GitLab into Notion.

    The run walks the stages of SyncStage strictly in order and never re-enters
    a stage. Any exception escaping a stage aborts the run in that stage.
    """

    def __init__(
        self,
        tracker: TrackerClientBase,
        store: MirrorStoreClientBase,
        assignee_name: str,
        title_prefix: str,
        batch_size: int = DEFAULT_BATCH_SIZE,
        page_size: int = DEFAULT_PAGE_SIZE,
        unparsable_identity_policy: UnparsableIdentityPolicy = UnparsableIdentityPolicy.SKIP,
    ) -> None:
        """Initialize the pipeline with its collaborators and run parameters."""
        self.tracker = tracker
        self.store = store
        self.assignee_name = assignee_name
        self.page_size = page_size
        self.unparsable_identity_policy = unparsable_identity_policy
        self.writer = BatchedWriter(store, title_prefix, batch_size=batch_size)
        self.stage = SyncStage.IDLE
        self._stage_started_at = time.time()

    def _enter(self, stage: SyncStage) -> None:
        if _STAGE_ORDER.index(stage) != _STAGE_ORDER.index(self.stage) + 1:
            raise RuntimeError(f"Cannot move from stage {self.stage.value} to {stage.value}")
        now = time.time()
        logger.info(
            "Entering sync stage",
            stage=stage.value,
            previous_stage=self.stage.value,
            previous_stage_duration=round(now - self._stage_started_at, 2),
        )
        self.stage = stage
        self._stage_started_at = now

    async def build_index(self) -> IdentityIndex:
        """Index the pages already in Notion by the GitLab issue IID they mirror."""
        self._enter(SyncStage.BUILDING_INDEX)
        records = await list_destination_records(self.store, self.unparsable_identity_policy)
        index = IdentityIndex.from_records(records)
        logger.info("Built identity index", indexed_count=len(index))
        return index

    async def list_source(self) -> tuple[list[GitLabIssue], list[str]]:
        """Fetch the issues to mirror and the current project labels."""
        self._enter(SyncStage.LISTING)
        issues = await list_source_issues(self.tracker, self.assignee_name, page_size=self.page_size)
        label_names = await list_source_label_names(self.tracker)
        return issues, label_names

    async def sync_taxonomy(self, label_names: list[str]) -> int:
        """Replace the Notion tag options with the GitLab labels."""
        self._enter(SyncStage.SYNCING_TAXONOMY)
        options = await sync_label_options(self.store, label_names)
        return len(options)

    def reconcile(self, issues: list[GitLabIssue], index: IdentityIndex) -> ReconcileResult:
        """Classify issues into creates and updates."""
        self._enter(SyncStage.RECONCILING)
        return classify(issues, index)

    async def write_creates(self, work: ReconcileResult) -> WriteSummary:
        """Create pages for issues not yet mirrored."""
        self._enter(SyncStage.WRITING_CREATES)
        return await self.writer.create_pages(work.creates)

    async def write_updates(self, work: ReconcileResult) -> WriteSummary:
        """Overwrite pages of issues already mirrored."""
        self._enter(SyncStage.WRITING_UPDATES)
        return await self.writer.update_pages(work.updates)

    async def run(self) -> SyncRunResult:
        """Run every stage in order and return the result of the pass."""
        start_time = time.time()
        index = await self.build_index()
        issues, label_names = await self.list_source()
        labels_synced = await self.sync_taxonomy(label_names)
        work = self.reconcile(issues, index)
        creates = await self.write_creates(work)
        updates = await self.write_updates(work)
        self._enter(SyncStage.DONE)

        result = SyncRunResult(
            stage=self.stage,
            issues_fetched=len(issues),
            pages_indexed=len(index),
            labels_synced=labels_synced,
            creates=creates,
            updates=updates,
        )
        logger.info(
            "Notion database is synced with GitLab",
            issues_fetched=result.issues_fetched,
            created_count=creates.succeeded,
            updated_count=updates.succeeded,
            failed_count=len(result.failures),
            duration=round(time.time() - start_time, 2),
        )
        return result


async def run_sync_workflow(config: SyncConfig, transport: httpx.AsyncBaseTransport | None = None) -> SyncRunResult:
    """Run the sync workflow: connect to both APIs and mirror the GitLab issues into Notion.

    An httpx transport may be supplied to route both clients through a stub.
    """
    async with (
        GitLabAdapter.create(
            gitlab_domain=config.gitlab_domain,
            gitlab_project_id=config.gitlab_project_id,
            gitlab_token=config.gitlab_token,
            max_retries=config.max_retries,
            transport=transport,
        ) as tracker,
        NotionAdapter.create(
            notion_key=config.notion_key,
            database_id=config.notion_database_id,
            notion_api_url=config.notion_api_url,
            notion_version=config.notion_version,
            max_retries=config.max_retries,
            transport=transport,
        ) as store,
    ):
        # Fail fast on a wrong database ID or token before listing anything.
        database = await store.retrieve_database()
        logger.info("Connected to Notion database", database_id=database.get("id", config.notion_database_id))

        pipeline = SyncPipeline(
            tracker=tracker,
            store=store,
            assignee_name=config.assignee_name,
            title_prefix=config.title_prefix,
            batch_size=config.batch_size,
            page_size=config.page_size,
            unparsable_identity_policy=config.unparsable_identity_policy,
        )
        return await pipeline.run()
