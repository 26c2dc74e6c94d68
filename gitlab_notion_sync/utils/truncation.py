"""Utilities for fitting free text within Notion's rich text limits."""

from __future__ import annotations

import structlog

from gitlab_notion_sync.utils.constants import (
    NOTION_MAX_RICH_TEXT_SEGMENTS,
    NOTION_MAX_TEXT_LENGTH,
    TRUNCATION_SUFFIX,
)

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def truncate_string_at_end(
    content: str,
    max_length: int,
    truncation_suffix: str = TRUNCATION_SUFFIX,
) -> tuple[str, bool]:
    """Truncate a string at the end if it exceeds max_length.

    Args:
        content: The string to potentially truncate.
        max_length: Maximum allowed length for the result (including truncation suffix).
        truncation_suffix: Template for truncation indicator with {remaining} placeholder.

    Returns:
        Tuple of (truncated_content, was_truncated).
        If truncation occurs, the result includes the truncation suffix.
    """
    if not content or len(content) <= max_length:
        return content, False

    remaining_chars = len(content) - max_length
    suffix = truncation_suffix.format(remaining=remaining_chars)

    truncate_at = max_length - len(suffix)
    if truncate_at <= 0:
        # max_length is smaller than the suffix itself
        return content[:max_length], True

    return content[:truncate_at] + suffix, True


def split_text_for_rich_text(
    content: str | None,
    segment_length: int = NOTION_MAX_TEXT_LENGTH,
    max_segments: int = NOTION_MAX_RICH_TEXT_SEGMENTS,
) -> list[str]:
    """Split free text into consecutive chunks that each fit one rich text segment.

    Absent or empty content yields a single empty chunk. Content longer than
    ``segment_length * max_segments`` is truncated with a marker so that the
    resulting array stays within Notion's segment limit.
    """
    if not content:
        return [""]

    budget = segment_length * max_segments
    content, was_truncated = truncate_string_at_end(content, budget)
    if was_truncated:
        logger.warning("Truncated text exceeding Notion rich text limits", max_length=budget)

    return [content[start : start + segment_length] for start in range(0, len(content), segment_length)]
