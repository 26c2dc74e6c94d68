"""Notion client adapter over the Notion REST API."""

from typing import Any, Self

import httpx
import structlog
from pydantic import ValidationError

from gitlab_notion_sync.exceptions import TransportError
from gitlab_notion_sync.schemas.notion import NotionPage, NotionQueryResult
from gitlab_notion_sync.utils.http import HTTPAdapterBase

from .abc import MirrorStoreClientBase
from .client import DEFAULT_NOTION_API_URL, DEFAULT_NOTION_VERSION, get_notion_client

logger = structlog.get_logger(__name__)


class NotionAdapter(HTTPAdapterBase, MirrorStoreClientBase):
    """Notion client adapter scoped to the database issues are mirrored into."""

    def __init__(self, client: httpx.AsyncClient, database_id: str, max_retries: int = 0) -> None:
        """Initialize the adapter with an already-configured client and target database."""
        super().__init__(client, max_retries=max_retries)
        self.database_id = database_id

    @classmethod
    def create(
        cls,
        notion_key: str,
        database_id: str,
        notion_api_url: str = DEFAULT_NOTION_API_URL,
        notion_version: str = DEFAULT_NOTION_VERSION,
        max_retries: int = 0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> Self:
        """Create a new Notion adapter for a database."""
        logger.info("Creating client for Notion database", notion_api_url=notion_api_url, database_id=database_id)
        client = get_notion_client(notion_key, notion_api_url, notion_version, transport=transport)
        return cls(client, database_id, max_retries=max_retries)

    async def retrieve_database(self) -> dict[str, Any]:
        """Retrieve the database definition."""
        return await self._request("GET", f"/databases/{self.database_id}")

    async def query_database(self, start_cursor: str | None = None) -> NotionQueryResult:
        """Query one page of database records."""
        body: dict[str, Any] = {}
        if start_cursor is not None:
            body["start_cursor"] = start_cursor
        data = await self._request("POST", f"/databases/{self.database_id}/query", json=body)
        try:
            return NotionQueryResult.model_validate(data)
        except ValidationError as exc:
            raise TransportError(f"Database query returned a malformed body: {exc}", method="POST") from exc

    async def create_page(self, properties: dict[str, Any]) -> NotionPage:
        """Create a page in the database."""
        body = {"parent": {"database_id": self.database_id}, "properties": properties}
        data = await self._request("POST", "/pages", json=body)
        return self._parse_page(data, "POST")

    async def update_page(self, page_id: str, properties: dict[str, Any]) -> NotionPage:
        """Overwrite properties of a page."""
        data = await self._request("PATCH", f"/pages/{page_id}", json={"properties": properties})
        return self._parse_page(data, "PATCH")

    async def update_database_schema(self, properties: dict[str, Any]) -> dict[str, Any]:
        """Update the property schema of the database."""
        return await self._request("PATCH", f"/databases/{self.database_id}", json={"properties": properties})

    @staticmethod
    def _parse_page(data: Any, method: str) -> NotionPage:
        try:
            return NotionPage.model_validate(data)
        except ValidationError as exc:
            raise TransportError(f"Page write returned a malformed body: {exc}", method=method) from exc
