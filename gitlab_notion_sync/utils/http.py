"""Shared request handling for the httpx-backed API adapters."""

from typing import Any, Self

import httpx
import structlog

from gitlab_notion_sync.exceptions import TransportError
from gitlab_notion_sync.utils.retry import retry_on_transient_error

logger = structlog.get_logger(__name__)


class HTTPAdapterBase:
    """Sends JSON requests through an httpx.AsyncClient and normalizes failures.

    Every failure, whether a non-2xx status, a network error or an undecodable
    body, is raised as a TransportError once the retry budget is spent.
    """

    def __init__(self, client: httpx.AsyncClient, max_retries: int = 0) -> None:
        """Initialize the adapter with an already-configured HTTP client."""
        self.client = client
        self.max_retries = max_retries

    async def __aenter__(self) -> Self:
        """Enter the adapter context."""
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        """Close the underlying HTTP client on exit."""
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self.client.aclose()

    @retry_on_transient_error()
    async def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Send a request, raising httpx errors for non-2xx statuses."""
        response = await self.client.request(method, url, **kwargs)
        response.raise_for_status()
        return response

    async def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        """Send a request and return its decoded JSON body."""
        try:
            response = await self._send(method, url, **kwargs)
        except httpx.HTTPStatusError as exc:
            logger.error(
                "API request failed",
                method=method,
                url=str(exc.request.url),
                status_code=exc.response.status_code,
                body=exc.response.text[:500],
            )
            raise TransportError(
                f"{method} {exc.request.url} failed with HTTP {exc.response.status_code}",
                method=method,
                url=str(exc.request.url),
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            logger.error("API request could not be completed", method=method, url=url, error=str(exc))
            raise TransportError(f"{method} {url} failed: {exc}", method=method, url=url) from exc

        try:
            return response.json()
        except ValueError as exc:
            raise TransportError(
                f"{method} {response.request.url} returned a malformed JSON body",
                method=method,
                url=str(response.request.url),
                status_code=response.status_code,
            ) from exc
