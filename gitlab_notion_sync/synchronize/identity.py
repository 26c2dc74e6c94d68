"""Rendering, parsing and indexing of the GitLab issue identity stored in Notion.

Notion stores the IID as display text (``#42``) rather than as a number, so the
integer is rendered on write and parsed back on read.
"""

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType
from typing import Any

import structlog

from gitlab_notion_sync.exceptions import ParseError
from gitlab_notion_sync.synchronize.models import DestinationRecord
from gitlab_notion_sync.utils.constants import IDENTITY_PATTERN, IDENTITY_PREFIX, IDENTITY_PROPERTY

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def render_identity(local_id: int) -> str:
    """Render a GitLab issue IID as the display text stored in Notion."""
    return f"{IDENTITY_PREFIX}{local_id}"


def parse_identity(text: str) -> int:
    """Parse the IID from the leading characters of an identity display text.

    Raises:
        ValueError: If the text does not start with the prefix followed by digits.
    """
    match = IDENTITY_PATTERN.match(text)
    if match is None:
        raise ValueError(f"expected '{IDENTITY_PREFIX}' followed by digits, got {text!r}")
    return int(match.group(1))


def extract_local_id(handle: str, properties: Mapping[str, Any]) -> int:
    """Read the IID from the first segment of a page's identity property.

    Raises:
        ParseError: If the property is absent, empty or does not parse.
    """
    try:
        plain_text = properties[IDENTITY_PROPERTY]["rich_text"][0]["plain_text"]
    except (KeyError, IndexError, TypeError) as exc:
        raise ParseError(handle, f"identity property '{IDENTITY_PROPERTY}' is missing or empty") from exc
    if not isinstance(plain_text, str):
        raise ParseError(handle, f"identity property '{IDENTITY_PROPERTY}' has no plain text")
    try:
        return parse_identity(plain_text)
    except ValueError as exc:
        raise ParseError(handle, str(exc)) from exc


class IdentityIndex(Mapping[int, str]):
    """Read-only mapping from GitLab issue IID to the handle of its Notion page.

    Built once per run from the destination listing and passed explicitly to
    the reconciler.
    """

    def __init__(self, handles_by_local_id: Mapping[int, str]) -> None:
        """Initialize the index from an IID to handle mapping."""
        self._handles = MappingProxyType(dict(handles_by_local_id))

    @classmethod
    def from_records(cls, records: Iterable[DestinationRecord]) -> "IdentityIndex":
        """Build the index, keeping the last page seen for each IID."""
        handles: dict[int, str] = {}
        for record in records:
            replaced = handles.get(record.local_id)
            if replaced is not None:
                logger.warning(
                    "Duplicate Notion page for GitLab issue, keeping the last",
                    local_id=record.local_id,
                    kept_handle=record.handle,
                    ignored_handle=replaced,
                )
            handles[record.local_id] = record.handle
        return cls(handles)

    def __getitem__(self, local_id: int) -> str:
        return self._handles[local_id]

    def __iter__(self) -> Iterator[int]:
        return iter(self._handles)

    def __len__(self) -> int:
        return len(self._handles)
