"""Sets up the authenticated httpx client for the Notion API."""

import httpx

DEFAULT_NOTION_API_URL = "https://api.notion.com/v1"
DEFAULT_NOTION_VERSION = "2022-06-28"


def get_notion_client(
    notion_key: str,
    notion_api_url: str = DEFAULT_NOTION_API_URL,
    notion_version: str = DEFAULT_NOTION_VERSION,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Returns an httpx client authenticated with a Notion integration token."""
    if not notion_key:
        raise RuntimeError("Notion authentication requires notion_key in config.")
    return httpx.AsyncClient(
        base_url=notion_api_url.rstrip("/"),
        headers={
            "Authorization": f"Bearer {notion_key}",
            "Notion-Version": notion_version,
            "Content-Type": "application/json",
        },
        transport=transport,
    )
