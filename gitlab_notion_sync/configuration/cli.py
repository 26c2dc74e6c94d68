"""Defines the Command Line Interface (CLI) using Typer."""

import asyncio
import sys

import typer
from dotenv import load_dotenv
from typer import Option
from typing_extensions import Annotated

from gitlab_notion_sync.configuration.driver import get_sync_config
from gitlab_notion_sync.configuration.exceptions import InvalidConfigurationElementError, RequiredConfigurationElementError
from gitlab_notion_sync.configuration.models import UnparsableIdentityPolicy
from gitlab_notion_sync.synchronize.driver import run_sync_workflow
from gitlab_notion_sync.utils.logging import configure_logging

load_dotenv()

typer_app = typer.Typer(pretty_exceptions_show_locals=False, add_completion=False)


@typer_app.command()
def sync_cli(
    gitlab_domain: Annotated[str | None, Option(envvar="GITLAB_DOMAIN", help="Host name of the GitLab instance.")] = None,
    gitlab_project_id: Annotated[str | None, Option(envvar="GITLAB_PROJECT_ID", help="GitLab project ID or path.")] = None,
    gitlab_token: Annotated[str | None, Option(envvar="GITLAB_TOKEN", help="GitLab access token.", show_default=False)] = None,
    notion_key: Annotated[str | None, Option(envvar="NOTION_KEY", help="Notion integration token.", show_default=False)] = None,
    notion_database_id: Annotated[str | None, Option(envvar="NOTION_DATABASE_ID", help="ID of the Notion database to sync into.")] = None,
    assignee_name: Annotated[str | None, Option(envvar="ASSIGNEE_NAME", help="Only issues assigned to this person are mirrored.")] = None,
    title_prefix: Annotated[str | None, Option(envvar="TITLE_PREFIX", help="Tag prepended to every mirrored title.")] = None,
    batch_size: Annotated[int | None, Option(envvar="BATCH_SIZE", help="Concurrent Notion writes per batch.")] = None,
    page_size: Annotated[int | None, Option(envvar="PAGE_SIZE", help="GitLab issues requested per page.")] = None,
    max_retries: Annotated[int | None, Option(envvar="MAX_RETRIES", help="Retries for rate limited or failed requests.")] = None,
    unparsable_identity_policy: Annotated[
        UnparsableIdentityPolicy | None,
        Option(envvar="UNPARSABLE_IDENTITY_POLICY", help="Skip or fail on Notion pages without a parsable issue ID."),
    ] = None,
    debug: Annotated[bool, Option(envvar="DEBUG", help="Enable debug mode.")] = False,
) -> None:
    """Mirror the GitLab issues assigned to one person into a Notion database."""
    try:
        config = get_sync_config(
            debug=debug,
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
            unparsable_identity_policy=unparsable_identity_policy,
        )
    except (RequiredConfigurationElementError, InvalidConfigurationElementError) as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc

    configure_logging(config.debug)

    result = asyncio.run(run_sync_workflow(config))

    typer.echo("")
    typer.echo(f"Fetched {result.issues_fetched} issues from GitLab")
    typer.echo(f"Created {result.creates.succeeded} pages in Notion")
    typer.echo(f"Updated {result.updates.succeeded} pages in Notion")
    if result.failures:
        typer.echo(f"Error(s) encountered while writing {len(result.failures)} issue(s):", err=True)
        for failure in result.failures:
            typer.echo(f"  #{failure.local_id}: {failure.error}", err=True)
        sys.exit(1)
    typer.echo("✅ Notion database is synced with GitLab.")


if __name__ == "__main__":
    typer_app()
