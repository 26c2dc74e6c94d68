"""Synchronous driver for configuration reconciliation for the CLI entry point."""

import asyncio

import structlog

from gitlab_notion_sync.configuration import reconcile
from gitlab_notion_sync.configuration.models import SyncConfig, UnparsableIdentityPolicy

logger = structlog.get_logger(__name__)


def get_sync_config(
    debug: bool = False,
    gitlab_domain: str | None = None,
    gitlab_project_id: str | None = None,
    gitlab_token: str | None = None,
    notion_key: str | None = None,
    notion_database_id: str | None = None,
    assignee_name: str | None = None,
    title_prefix: str | None = None,
    batch_size: int | None = None,
    page_size: int | None = None,
    max_retries: int | None = None,
    unparsable_identity_policy: UnparsableIdentityPolicy | None = None,
) -> SyncConfig:
    """Synchronously get the reconciled sync configuration."""
    resolved = asyncio.run(
        reconcile.reconcile_sync_configuration(
            cli_debug=debug,
            cli_gitlab_domain=gitlab_domain,
            cli_gitlab_project_id=gitlab_project_id,
            cli_gitlab_token=gitlab_token,
            cli_notion_key=notion_key,
            cli_notion_database_id=notion_database_id,
            cli_assignee_name=assignee_name,
            cli_title_prefix=title_prefix,
            cli_batch_size=batch_size,
            cli_page_size=page_size,
            cli_max_retries=max_retries,
            cli_unparsable_identity_policy=unparsable_identity_policy,
        )
    )
    logger.debug(
        "Resolved sync configuration",
        gitlab_domain=resolved.gitlab_domain,
        gitlab_project_id=resolved.gitlab_project_id,
        notion_database_id=resolved.notion_database_id,
        batch_size=resolved.batch_size,
        page_size=resolved.page_size,
        max_retries=resolved.max_retries,
    )
    return resolved
