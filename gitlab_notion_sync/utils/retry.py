"""Retry decorator for handling rate limits and transient HTTP errors.

Retries are opt-in. With the default budget of zero retries a transient failure
surfaces immediately, which the engine then treats as a fatal TransportError.
"""

import asyncio
import functools
import inspect
from typing import Any, Callable, TypeVar

import httpx
import structlog

from gitlab_notion_sync.utils.constants import RETRYABLE_STATUS_CODES

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def _retry_after_seconds(response: httpx.Response) -> float | None:
    """Return the Retry-After header value in seconds, if present and numeric."""
    retry_after = response.headers.get("retry-after")
    if retry_after is None:
        return None
    try:
        return float(retry_after)
    except ValueError:
        logger.warning("Invalid retry-after header value", retry_after=retry_after)
        return None


def retry_on_transient_error(
    max_retries: int | None = None,
    initial_delay: float = 1.0,
    max_delay: float = 60.0,
    exponential_base: float = 2.0,
) -> Callable[[F], F]:
    """Decorator for retrying async adapter methods on transient HTTP failures.

    This decorator handles:
    - HTTP 429 and 5xx gateway responses raised as httpx.HTTPStatusError
    - Network failures raised as httpx.TransportError
    - Respects the Retry-After header, otherwise backs off exponentially

    Args:
        max_retries: Maximum number of retry attempts. When None, the budget is
            read from the ``max_retries`` attribute of the bound instance, so a
            single decorated method can honour per-adapter configuration.
        initial_delay: Initial delay in seconds between retries (default: 1.0)
        max_delay: Maximum delay in seconds between retries (default: 60.0)
        exponential_base: Base for exponential backoff calculation (default: 2.0)

    Returns:
        Decorated function with retry logic

    Example:
        @retry_on_transient_error()
        async def _send(self, method: str, url: str) -> httpx.Response:
            ...
    """

    def decorator(func: F) -> F:
        if not inspect.iscoroutinefunction(func):
            raise TypeError(f"Function {func.__name__} decorated with @retry_on_transient_error must be async.")

        @functools.wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            if max_retries is not None:
                retries = max_retries
            else:
                retries = getattr(args[0], "max_retries", 0) if args else 0
            delay = initial_delay

            for attempt in range(retries + 1):
                try:
                    return await func(*args, **kwargs)
                except httpx.HTTPStatusError as e:
                    status_code = e.response.status_code
                    if status_code not in RETRYABLE_STATUS_CODES or attempt == retries:
                        raise
                    wait_time = _retry_after_seconds(e.response)
                    if wait_time is None:
                        wait_time = delay
                    wait_time = min(wait_time, max_delay)
                    logger.warning(
                        f"Transient HTTP error, retrying in {wait_time} seconds",
                        function=func.__name__,
                        attempt=attempt + 1,
                        max_retries=retries,
                        status_code=status_code,
                        wait_time=wait_time,
                    )
                except httpx.TransportError as e:
                    if attempt == retries:
                        raise
                    wait_time = min(delay, max_delay)
                    logger.warning(
                        f"Network error, retrying in {wait_time} seconds",
                        function=func.__name__,
                        attempt=attempt + 1,
                        max_retries=retries,
                        error=str(e),
                        wait_time=wait_time,
                    )

                await asyncio.sleep(wait_time)
                delay = min(delay * exponential_base, max_delay)

        return async_wrapper  # type: ignore

    return decorator
