"""Base ABC for mirror store clients."""

from abc import ABC, abstractmethod
from typing import Any

from gitlab_notion_sync.schemas.notion import NotionPage, NotionQueryResult


class MirrorStoreClientBase(ABC):
    """Base ABC for mirror store clients bound to a single database."""

    @abstractmethod
    async def retrieve_database(self) -> dict[str, Any]:
        """Retrieve the database definition, including its property schema."""
        pass

    @abstractmethod
    async def query_database(self, start_cursor: str | None = None) -> NotionQueryResult:
        """Query one page of database records, starting at the given cursor."""
        pass

    @abstractmethod
    async def create_page(self, properties: dict[str, Any]) -> NotionPage:
        """Create a record in the database and return it with its new handle."""
        pass

    @abstractmethod
    async def update_page(self, page_id: str, properties: dict[str, Any]) -> NotionPage:
        """Overwrite properties of an existing record."""
        pass

    @abstractmethod
    async def update_database_schema(self, properties: dict[str, Any]) -> dict[str, Any]:
        """Update the property schema of the database."""
        pass
