"""Reconciles configuration between CLI arguments and environment variables."""

from typing import TypeVar

from gitlab_notion_sync.configuration.env import settings
from gitlab_notion_sync.configuration.exceptions import InvalidConfigurationElementError, RequiredConfigurationElementError
from gitlab_notion_sync.configuration.models import SyncConfig, UnparsableIdentityPolicy

T = TypeVar("T")


def _prefer_cli(cli_value: T | None, env_value: T) -> T:
    """Return the CLI value when one was given, otherwise the environment value."""
    if cli_value is None or cli_value == "":
        return env_value
    return cli_value


def _require(value: str | None, name: str, cli_name: str, env_name: str) -> str:
    if not value:
        raise RequiredConfigurationElementError(name=name, cli_name=cli_name, env_name=env_name)
    return value


async def reconcile_sync_configuration(
    cli_debug: bool = False,
    cli_gitlab_domain: str | None = None,
    cli_gitlab_project_id: str | None = None,
    cli_gitlab_token: str | None = None,
    cli_notion_key: str | None = None,
    cli_notion_database_id: str | None = None,
    cli_assignee_name: str | None = None,
    cli_title_prefix: str | None = None,
    cli_batch_size: int | None = None,
    cli_page_size: int | None = None,
    cli_max_retries: int | None = None,
    cli_unparsable_identity_policy: UnparsableIdentityPolicy | None = None,
) -> SyncConfig:
    """Reconcile CLI arguments with environment settings into a sync configuration.

    CLI values take precedence. Connection details, the assignee filter and
    the title prefix are required and have no defaults.

    Raises:
        RequiredConfigurationElementError: If a required element is missing from both sources.
        InvalidConfigurationElementError: If a numeric element is out of range.
    """
    gitlab_domain = _require(_prefer_cli(cli_gitlab_domain, settings.GITLAB_DOMAIN), "GitLab domain", "--gitlab-domain", "GITLAB_DOMAIN")
    gitlab_project_id = _require(
        _prefer_cli(cli_gitlab_project_id, settings.GITLAB_PROJECT_ID), "GitLab project ID", "--gitlab-project-id", "GITLAB_PROJECT_ID"
    )
    gitlab_token = _require(_prefer_cli(cli_gitlab_token, settings.GITLAB_TOKEN), "GitLab token", "--gitlab-token", "GITLAB_TOKEN")
    notion_key = _require(_prefer_cli(cli_notion_key, settings.NOTION_KEY), "Notion integration token", "--notion-key", "NOTION_KEY")
    notion_database_id = _require(
        _prefer_cli(cli_notion_database_id, settings.NOTION_DATABASE_ID), "Notion database ID", "--notion-database-id", "NOTION_DATABASE_ID"
    )
    assignee_name = _require(_prefer_cli(cli_assignee_name, settings.ASSIGNEE_NAME), "Assignee name", "--assignee-name", "ASSIGNEE_NAME")
    title_prefix = _require(_prefer_cli(cli_title_prefix, settings.TITLE_PREFIX), "Title prefix", "--title-prefix", "TITLE_PREFIX")

    batch_size = _prefer_cli(cli_batch_size, settings.BATCH_SIZE)
    if batch_size < 1:
        raise InvalidConfigurationElementError("BATCH_SIZE", batch_size, "must be a positive integer")
    page_size = _prefer_cli(cli_page_size, settings.PAGE_SIZE)
    if page_size < 1:
        raise InvalidConfigurationElementError("PAGE_SIZE", page_size, "must be a positive integer")
    max_retries = _prefer_cli(cli_max_retries, settings.MAX_RETRIES)
    if max_retries < 0:
        raise InvalidConfigurationElementError("MAX_RETRIES", max_retries, "must not be negative")

    return SyncConfig(
        debug=cli_debug or settings.DEBUG,
        gitlab_domain=gitlab_domain,
        gitlab_project_id=gitlab_project_id,
        gitlab_token=gitlab_token,
        notion_key=notion_key,
        notion_database_id=notion_database_id,
        assignee_name=assignee_name,
        title_prefix=title_prefix,
        batch_size=batch_size,
        page_size=page_size,
        max_retries=max_retries,
        unparsable_identity_policy=UnparsableIdentityPolicy(
            _prefer_cli(cli_unparsable_identity_policy, settings.UNPARSABLE_IDENTITY_POLICY)
        ),
        notion_api_url=settings.NOTION_API_URL,
        notion_version=settings.NOTION_VERSION,
    )
