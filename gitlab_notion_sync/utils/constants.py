"""Shared constants used across the application."""

import re

# Pagination and batching
# -----------------------

DEFAULT_PAGE_SIZE = 100
"""Number of GitLab issues requested per page. A shorter page ends pagination."""

DEFAULT_BATCH_SIZE = 10
"""Number of Notion writes issued concurrently within one batch."""

# Identity rendering
# ------------------

IDENTITY_PREFIX = "#"
"""One-character prefix rendered in front of the GitLab issue IID."""

IDENTITY_PATTERN = re.compile(r"^#(\d+)")
"""Pattern recovering the IID from the leading characters of the identity text."""

# Notion database property names
# ------------------------------

IDENTITY_PROPERTY = "id"
OPEN_PROPERTY = "open"
TITLE_PROPERTY = "title"
NOTES_PROPERTY = "notes"
ASSIGNEES_PROPERTY = "assignees"
LAST_UPDATED_PROPERTY = "last_updated_at"
TYPE_OF_WORK_PROPERTY = "type_of_work"
TAGS_PROPERTY = "tags"

TYPE_OF_WORK = "Programming"
"""Category written to every mirrored page, independent of the issue."""

# Notion limits
# -------------

NOTION_MAX_TEXT_LENGTH = 2000
"""Maximum number of characters Notion accepts in one rich text segment."""

NOTION_MAX_RICH_TEXT_SEGMENTS = 100
"""Maximum number of segments Notion accepts in one rich text array."""

TRUNCATION_SUFFIX = "\n... [truncated - {remaining} characters removed]"
"""Suffix template appended to truncated content. Use .format(remaining=N) to fill in count."""

# Multi-select colors assigned round-robin by label position.
AVAILABLE_COLORS = (
    "blue",
    "brown",
    "default",
    "gray",
    "green",
    "orange",
    "pink",
    "purple",
    "red",
    "yellow",
)

# Transient HTTP failures worth retrying when retries are enabled.
RETRYABLE_STATUS_CODES = frozenset({429, 500, 502, 503, 504})
