"""Pydantic schemas for the Notion database that mirrors GitLab issues.

The property models are shared by the field mapper, which builds them, and the
Notion adapter, which serializes them onto the wire.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from gitlab_notion_sync.utils.constants import (
    ASSIGNEES_PROPERTY,
    IDENTITY_PROPERTY,
    LAST_UPDATED_PROPERTY,
    NOTES_PROPERTY,
    OPEN_PROPERTY,
    TAGS_PROPERTY,
    TITLE_PROPERTY,
    TYPE_OF_WORK_PROPERTY,
)


class Annotations(BaseModel):
    """Pydantic model for rich text annotations. Mirrored text is always unstyled."""

    bold: bool = False
    italic: bool = False
    strikethrough: bool = False
    underline: bool = False
    code: bool = False
    color: str = "default"


class TextLink(BaseModel):
    """Pydantic model for a hyperlink attached to a text segment."""

    url: str


class TextContent(BaseModel):
    """Pydantic model for the text payload of a rich text segment."""

    content: str
    link: TextLink | None = None


class RichTextSegment(BaseModel):
    """Pydantic model for one rich text segment."""

    type: Literal["text"] = "text"
    text: TextContent
    annotations: Annotations = Field(default_factory=Annotations)
    plain_text: str | None = None
    href: str | None = None


class RichTextProperty(BaseModel):
    """Pydantic model for a rich text property value."""

    rich_text: list[RichTextSegment]


class TitleProperty(BaseModel):
    """Pydantic model for the title property value."""

    title: list[RichTextSegment]


class CheckboxProperty(BaseModel):
    """Pydantic model for a checkbox property value."""

    type: Literal["checkbox"] = "checkbox"
    checkbox: bool


class DateValue(BaseModel):
    """Pydantic model for a date range start."""

    start: str


class DateProperty(BaseModel):
    """Pydantic model for a date property value."""

    date: DateValue


class SelectOption(BaseModel):
    """Pydantic model for a multi-select option.

    Page values carry the name only. Database schema options also carry the
    color assigned during taxonomy sync.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    color: str | None = None


class MultiSelectProperty(BaseModel):
    """Pydantic model for a multi-select property value."""

    multi_select: list[SelectOption]


class IssuePageProperties(BaseModel):
    """Pydantic model for the full set of properties of a mirrored issue page."""

    model_config = ConfigDict(populate_by_name=True)

    id: RichTextProperty = Field(alias=IDENTITY_PROPERTY)
    open: CheckboxProperty = Field(alias=OPEN_PROPERTY)
    title: TitleProperty = Field(alias=TITLE_PROPERTY)
    notes: RichTextProperty = Field(alias=NOTES_PROPERTY)
    assignees: RichTextProperty = Field(alias=ASSIGNEES_PROPERTY)
    last_updated_at: DateProperty = Field(alias=LAST_UPDATED_PROPERTY)
    type_of_work: MultiSelectProperty = Field(alias=TYPE_OF_WORK_PROPERTY)
    tags: MultiSelectProperty = Field(alias=TAGS_PROPERTY)

    def to_notion(self) -> dict[str, Any]:
        """Serialize into the JSON-ready property bag expected by the Notion API."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class NotionPage(BaseModel):
    """Pydantic model for a page returned by a database query."""

    model_config = ConfigDict(extra="ignore")

    id: str
    archived: bool = False
    properties: dict[str, Any] = Field(default_factory=dict)


class NotionQueryResult(BaseModel):
    """Pydantic model for one page of database query results."""

    model_config = ConfigDict(extra="ignore")

    results: list[NotionPage]
    next_cursor: str | None = None
    has_more: bool = False
