"""In-memory GitLab and Notion API servers for integration tests."""

import json
from typing import Any

import httpx
import pytest

GITLAB_HOST = "gitlab.example.com"
NOTION_HOST = "api.notion.com"
DATABASE_ID = "db-123"


class FakeGitLabServer:
    """Serves project issues and labels with page-number pagination."""

    def __init__(self, issues: list[dict[str, Any]], labels: list[str]) -> None:
        self.issues = issues
        self.labels = labels
        self.requests: list[httpx.Request] = []

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.headers.get("PRIVATE-TOKEN") != "glpat-secret":
            return httpx.Response(401, json={"message": "401 Unauthorized"})
        page = int(request.url.params.get("page", "1"))
        per_page = int(request.url.params.get("per_page", "20"))
        if request.url.path.endswith("/issues"):
            items: list[Any] = self.issues
        elif request.url.path.endswith("/labels"):
            items = [{"id": position, "name": name, "color": "#ff0000"} for position, name in enumerate(self.labels)]
        elif request.url.path.endswith("/milestones"):
            items = []
        else:
            return httpx.Response(404, json={"message": "404 Not Found"})
        start = (page - 1) * per_page
        return httpx.Response(200, json=items[start : start + per_page])


class FakeNotionServer:
    """Keeps database pages in memory and serves them with cursor pagination."""

    def __init__(self, page_size: int = 2) -> None:
        self.page_size = page_size
        self.pages: dict[str, dict[str, Any]] = {}
        self.schema: dict[str, Any] = {}
        self.operations: list[str] = []

    def handle(self, request: httpx.Request) -> httpx.Response:
        if request.headers.get("Authorization") != "Bearer secret_key":
            return httpx.Response(401, json={"object": "error", "code": "unauthorized"})
        body = json.loads(request.content) if request.content else {}
        path = request.url.path.removeprefix("/v1")
        if request.method == "GET" and path == f"/databases/{DATABASE_ID}":
            return httpx.Response(200, json={"object": "database", "id": DATABASE_ID, "properties": self.schema})
        if request.method == "POST" and path == f"/databases/{DATABASE_ID}/query":
            self.operations.append("query")
            return self._query(body.get("start_cursor"))
        if request.method == "PATCH" and path == f"/databases/{DATABASE_ID}":
            self.operations.append("update_schema")
            self.schema.update(body["properties"])
            return httpx.Response(200, json={"object": "database", "id": DATABASE_ID, "properties": self.schema})
        if request.method == "POST" and path == "/pages":
            self.operations.append("create")
            page_id = f"page-{len(self.pages) + 1}"
            self.pages[page_id] = body["properties"]
            return httpx.Response(200, json={"object": "page", "id": page_id, "properties": body["properties"]})
        if request.method == "PATCH" and path.startswith("/pages/"):
            page_id = path.removeprefix("/pages/")
            if page_id not in self.pages:
                return httpx.Response(404, json={"object": "error", "code": "object_not_found"})
            self.operations.append("update")
            self.pages[page_id] = body["properties"]
            return httpx.Response(200, json={"object": "page", "id": page_id, "properties": body["properties"]})
        return httpx.Response(404, json={"object": "error", "code": "invalid_request_url"})

    def _query(self, start_cursor: str | None) -> httpx.Response:
        page_ids = list(self.pages)
        start = int(start_cursor) if start_cursor else 0
        end = start + self.page_size
        next_cursor = str(end) if end < len(page_ids) else None
        results = [{"object": "page", "id": page_id, "archived": False, "properties": self.pages[page_id]} for page_id in page_ids[start:end]]
        return httpx.Response(200, json={"object": "list", "results": results, "next_cursor": next_cursor, "has_more": next_cursor is not None})


def gitlab_issue_payload(iid: int, assignee: str = "Jan Strich", **overrides: Any) -> dict[str, Any]:
    """Build a GitLab issue as returned by the REST API."""
    payload: dict[str, Any] = {
        "id": 5000 + iid,
        "iid": iid,
        "project_id": 42,
        "title": f"Issue {iid}",
        "description": f"Body of issue {iid}",
        "state": "opened",
        "assignees": [{"id": 1, "name": assignee, "username": assignee.lower().replace(" ", "")}],
        "labels": ["bug"],
        "updated_at": "2024-03-04T05:06:07.000Z",
        "web_url": f"https://{GITLAB_HOST}/group/project/-/issues/{iid}",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def gitlab_server() -> FakeGitLabServer:
    """GitLab project with five issues, four of them assigned to Jan Strich."""
    issues = [gitlab_issue_payload(iid) for iid in range(1, 5)]
    issues.insert(2, gitlab_issue_payload(99, assignee="Someone Else"))
    return FakeGitLabServer(issues, labels=["bug", "feature", "docs"])


@pytest.fixture
def notion_server() -> FakeNotionServer:
    """Empty Notion database."""
    return FakeNotionServer()


@pytest.fixture
def transport(gitlab_server: FakeGitLabServer, notion_server: FakeNotionServer) -> httpx.MockTransport:
    """Route requests to the fake server matching their host."""

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == GITLAB_HOST:
            return gitlab_server.handle(request)
        if request.url.host == NOTION_HOST:
            return notion_server.handle(request)
        return httpx.Response(404)

    return httpx.MockTransport(handler)
