"""Lists the Notion pages that already mirror GitLab issues."""

import time

import structlog

from gitlab_notion_sync.configuration.models import UnparsableIdentityPolicy
from gitlab_notion_sync.exceptions import ParseError
from gitlab_notion_sync.notion.abc import MirrorStoreClientBase
from gitlab_notion_sync.schemas.notion import NotionPage
from gitlab_notion_sync.synchronize.identity import extract_local_id
from gitlab_notion_sync.synchronize.models import DestinationRecord

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


async def list_notion_pages(store: MirrorStoreClientBase) -> list[NotionPage]:
    """Fetch every page of the database by following the server-issued cursor."""
    pages: list[NotionPage] = []
    cursor: str | None = None
    while True:
        result = await store.query_database(start_cursor=cursor)
        pages.extend(result.results)
        if not result.next_cursor:
            break
        cursor = result.next_cursor
    return pages


async def list_destination_records(
    store: MirrorStoreClientBase,
    policy: UnparsableIdentityPolicy = UnparsableIdentityPolicy.SKIP,
) -> list[DestinationRecord]:
    """Fetch every database page and resolve the GitLab issue IID each one mirrors.

    Pages whose identity property is absent or malformed are logged and left
    out under the ``skip`` policy. Such pages are invisible to the reconciler,
    so their issue is created again. Under the ``fail`` policy the first such
    page raises ParseError.
    """
    start_time = time.time()
    pages = await list_notion_pages(store)

    records: list[DestinationRecord] = []
    skipped = 0
    for page in pages:
        try:
            local_id = extract_local_id(page.id, page.properties)
        except ParseError as exc:
            if policy == UnparsableIdentityPolicy.FAIL:
                logger.error("Notion page has an unparsable issue identity", handle=page.id, reason=exc.reason)
                raise
            logger.warning("Skipping Notion page with an unparsable issue identity", handle=page.id, reason=exc.reason)
            skipped += 1
            continue
        records.append(DestinationRecord(handle=page.id, local_id=local_id))

    logger.info(
        "Fetched pages from Notion database",
        page_count=len(pages),
        record_count=len(records),
        skipped_count=skipped,
        duration=round(time.time() - start_time, 2),
    )
    return records
