"""Integration tests for the complete GitLab to Notion sync workflow."""

from typing import Any

import httpx
import pytest

from gitlab_notion_sync.exceptions import TransportError
from gitlab_notion_sync.synchronize.driver import run_sync_workflow
from gitlab_notion_sync.synchronize.identity import extract_local_id
from gitlab_notion_sync.synchronize.models import SyncDecision, SyncStage

from ..unit.fakes import make_sync_config
from .conftest import FakeGitLabServer, FakeNotionServer, gitlab_issue_payload


def _mirrored_ids(notion_server: FakeNotionServer) -> list[int]:
    return sorted(extract_local_id(page_id, properties) for page_id, properties in notion_server.pages.items())


def _page_for(notion_server: FakeNotionServer, local_id: int) -> dict[str, Any]:
    return next(properties for page_id, properties in notion_server.pages.items() if extract_local_id(page_id, properties) == local_id)


@pytest.mark.asyncio
async def test_first_run_mirrors_assigned_issues(
    transport: httpx.MockTransport, gitlab_server: FakeGitLabServer, notion_server: FakeNotionServer
) -> None:
    """Test that a first run creates one page per assigned issue and syncs the tag options."""
    result = await run_sync_workflow(make_sync_config(page_size=2, batch_size=3), transport=transport)

    assert result.stage == SyncStage.DONE
    assert result.issues_fetched == 4
    assert result.count(SyncDecision.CREATE) == 4
    assert result.count(SyncDecision.UPDATE) == 0
    assert result.failures == []
    assert _mirrored_ids(notion_server) == [1, 2, 3, 4]
    assert notion_server.schema["tags"] == {
        "multi_select": {
            "options": [
                {"name": "bug", "color": "blue"},
                {"name": "feature", "color": "brown"},
                {"name": "docs", "color": "default"},
            ]
        }
    }
    assert notion_server.operations.index("update_schema") < notion_server.operations.index("create")

    page = _page_for(notion_server, 1)
    assert page["title"]["title"][0]["text"]["content"] == "G4KMU: Issue 1"
    assert page["tags"] == {"multi_select": [{"name": "bug"}]}
    issue_requests = [request for request in gitlab_server.requests if request.url.path.endswith("/issues")]
    assert [request.url.params["page"] for request in issue_requests] == ["1", "2", "3"]


@pytest.mark.asyncio
async def test_second_run_updates_instead_of_duplicating(
    transport: httpx.MockTransport, gitlab_server: FakeGitLabServer, notion_server: FakeNotionServer
) -> None:
    """Test that re-running over unchanged issues updates pages without creating duplicates."""
    config = make_sync_config()
    await run_sync_workflow(config, transport=transport)
    pages_after_first_run = dict(notion_server.pages)

    result = await run_sync_workflow(config, transport=transport)

    assert result.pages_indexed == 4
    assert result.count(SyncDecision.CREATE) == 0
    assert result.count(SyncDecision.UPDATE) == 4
    assert notion_server.pages == pages_after_first_run


@pytest.mark.asyncio
async def test_changed_issue_is_updated_and_new_issue_created(
    transport: httpx.MockTransport, gitlab_server: FakeGitLabServer, notion_server: FakeNotionServer
) -> None:
    """Test that edits in GitLab overwrite the mirrored page and new issues get a page."""
    config = make_sync_config()
    await run_sync_workflow(config, transport=transport)
    gitlab_server.issues[0] = gitlab_issue_payload(1, state="closed", title="Done")
    gitlab_server.issues.append(gitlab_issue_payload(5))

    result = await run_sync_workflow(config, transport=transport)

    assert result.count(SyncDecision.CREATE) == 1
    assert result.count(SyncDecision.UPDATE) == 4
    assert _page_for(notion_server, 1)["open"]["checkbox"] is False
    assert _page_for(notion_server, 1)["title"]["title"][0]["text"]["content"] == "G4KMU: Done"
    assert _mirrored_ids(notion_server) == [1, 2, 3, 4, 5]


@pytest.mark.asyncio
async def test_malformed_issue_fails_alone(
    transport: httpx.MockTransport, gitlab_server: FakeGitLabServer, notion_server: FakeNotionServer
) -> None:
    """Test that an issue missing required fields is reported while the others are mirrored."""
    broken = gitlab_issue_payload(7)
    del broken["web_url"]
    gitlab_server.issues.append(broken)

    result = await run_sync_workflow(make_sync_config(), transport=transport)

    assert [failure.local_id for failure in result.failures] == [7]
    assert _mirrored_ids(notion_server) == [1, 2, 3, 4]


@pytest.mark.asyncio
async def test_wrong_database_fails_before_listing(
    transport: httpx.MockTransport, gitlab_server: FakeGitLabServer, notion_server: FakeNotionServer
) -> None:
    """Test that an unknown database ID aborts the run before GitLab is queried."""
    with pytest.raises(TransportError) as exc_info:
        await run_sync_workflow(make_sync_config(notion_database_id="unknown"), transport=transport)

    assert exc_info.value.status_code == 404
    assert gitlab_server.requests == []
    assert notion_server.pages == {}


@pytest.mark.asyncio
async def test_invalid_gitlab_token_aborts_run(
    transport: httpx.MockTransport, gitlab_server: FakeGitLabServer, notion_server: FakeNotionServer
) -> None:
    """Test that a rejected GitLab token aborts the run without writing to Notion."""
    with pytest.raises(TransportError) as exc_info:
        await run_sync_workflow(make_sync_config(gitlab_token="wrong"), transport=transport)

    assert exc_info.value.status_code == 401
    assert notion_server.pages == {}
    assert "update_schema" not in notion_server.operations
