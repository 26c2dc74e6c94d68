"""Utility modules for shared functionality."""

from .constants import (
    AVAILABLE_COLORS,
    DEFAULT_BATCH_SIZE,
    DEFAULT_PAGE_SIZE,
    IDENTITY_PREFIX,
    NOTION_MAX_RICH_TEXT_SEGMENTS,
    NOTION_MAX_TEXT_LENGTH,
)
from .retry import retry_on_transient_error

__all__ = [
    "AVAILABLE_COLORS",
    "DEFAULT_BATCH_SIZE",
    "DEFAULT_PAGE_SIZE",
    "IDENTITY_PREFIX",
    "NOTION_MAX_RICH_TEXT_SEGMENTS",
    "NOTION_MAX_TEXT_LENGTH",
    "retry_on_transient_error",
]
