"""Writes create and update operations to Notion in bounded concurrent batches."""

import asyncio
import time
from collections.abc import Sequence

import structlog

from gitlab_notion_sync.exceptions import SyncError
from gitlab_notion_sync.notion.abc import MirrorStoreClientBase
from gitlab_notion_sync.synchronize.mapping import map_issue_to_properties
from gitlab_notion_sync.synchronize.models import CreatePage, UpdatePage, WorkItem
from gitlab_notion_sync.synchronize.results import WriteOutcome, WriteSummary
from gitlab_notion_sync.utils.constants import DEFAULT_BATCH_SIZE
from gitlab_notion_sync.utils.helpers import chunk

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


class BatchedWriter:
    """Executes work items against Notion, one fixed-size batch at a time.

    Operations within a batch run concurrently; the next batch starts only once
    every operation of the current one has settled. Each operation maps and
    writes its own issue, so a failing operation is recorded without affecting
    its siblings or later batches.
    """

    def __init__(self, store: MirrorStoreClientBase, title_prefix: str, batch_size: int = DEFAULT_BATCH_SIZE) -> None:
        """Initialize the writer with the target store and the title prefix used by the mapper."""
        if batch_size < 1:
            raise ValueError(f"Batch size must be a positive integer, got {batch_size}")
        self.store = store
        self.title_prefix = title_prefix
        self.batch_size = batch_size

    async def _apply(self, work_item: WorkItem) -> WriteOutcome:
        """Map and write a single work item, capturing any failure on the outcome."""
        try:
            properties = map_issue_to_properties(work_item.issue, self.title_prefix).to_notion()
            if isinstance(work_item, CreatePage):
                page = await self.store.create_page(properties)
                return WriteOutcome(work_item, handle=page.id)
            await self.store.update_page(work_item.handle, properties)
            return WriteOutcome(work_item, handle=work_item.handle)
        except SyncError as exc:
            logger.error(
                "Failed to write GitLab issue to Notion",
                local_id=work_item.issue.iid,
                decision=work_item.decision.value,
                error=str(exc),
                error_type=type(exc).__name__,
            )
            return WriteOutcome(work_item, error=exc)
        except Exception as exc:
            logger.exception(
                "Unexpected error while writing GitLab issue to Notion",
                local_id=work_item.issue.iid,
                decision=work_item.decision.value,
                error_type=type(exc).__name__,
            )
            return WriteOutcome(work_item, error=exc)

    async def execute(self, work_items: Sequence[WorkItem]) -> WriteSummary:
        """Run every work item and return the outcomes in input order."""
        outcomes: list[WriteOutcome] = []
        batches = chunk(work_items, self.batch_size)
        start_time = time.time()
        for batch_number, batch in enumerate(batches, start=1):
            settled = await asyncio.gather(*(self._apply(work_item) for work_item in batch), return_exceptions=True)
            # Only BaseException subclasses such as cancellation escape _apply.
            for result in settled:
                if isinstance(result, BaseException):
                    raise result
            batch_outcomes: list[WriteOutcome] = list(settled)  # type: ignore[arg-type]
            outcomes.extend(batch_outcomes)
            logger.info(
                "Completed batch",
                batch_number=batch_number,
                batch_count=len(batches),
                batch_size=len(batch),
                failed_count=sum(1 for outcome in batch_outcomes if not outcome.succeeded),
            )

        summary = WriteSummary(outcomes, batch_count=len(batches))
        logger.info(
            "Completed writes",
            operation_count=len(work_items),
            succeeded_count=summary.succeeded,
            failed_count=len(summary.failures),
            duration=round(time.time() - start_time, 2),
        )
        return summary

    async def create_pages(self, creates: Sequence[CreatePage]) -> WriteSummary:
        """Create a Notion page for each issue not yet mirrored."""
        logger.info("Creating Notion pages for new GitLab issues", count=len(creates))
        return await self.execute(creates)

    async def update_pages(self, updates: Sequence[UpdatePage]) -> WriteSummary:
        """Overwrite the Notion page of each issue already mirrored."""
        logger.info("Updating Notion pages for existing GitLab issues", count=len(updates))
        return await self.execute(updates)
