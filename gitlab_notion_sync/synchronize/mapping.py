"""Maps a GitLab issue onto the property schema of the Notion database."""

from gitlab_notion_sync.exceptions import MappingError
from gitlab_notion_sync.schemas.gitlab import GitLabIssue
from gitlab_notion_sync.schemas.notion import (
    CheckboxProperty,
    DateProperty,
    DateValue,
    IssuePageProperties,
    MultiSelectProperty,
    RichTextProperty,
    RichTextSegment,
    SelectOption,
    TextContent,
    TextLink,
    TitleProperty,
)
from gitlab_notion_sync.synchronize.identity import render_identity
from gitlab_notion_sync.utils.constants import TYPE_OF_WORK
from gitlab_notion_sync.utils.truncation import split_text_for_rich_text

OPEN_STATE = "opened"
CLOSED_STATE = "closed"


def _require(issue: GitLabIssue, field: str) -> str:
    value = getattr(issue, field)
    if value is None:
        raise MappingError(issue.iid, field)
    return value


def _text_segments(content: str | None) -> list[RichTextSegment]:
    return [RichTextSegment(text=TextContent(content=chunk)) for chunk in split_text_for_rich_text(content)]


def map_issue_to_properties(issue: GitLabIssue, title_prefix: str) -> IssuePageProperties:
    """Build the Notion page properties mirroring a GitLab issue.

    The mapping is pure: the same issue and prefix always produce an equal
    result. Label colors are not set here; they come from the database schema
    maintained by taxonomy sync.

    Raises:
        MappingError: If the issue lacks a field the schema requires.
    """
    title = _require(issue, "title")
    web_url = _require(issue, "web_url")
    updated_at = _require(issue, "updated_at")
    state = _require(issue, "state")
    if state not in (OPEN_STATE, CLOSED_STATE):
        raise MappingError(issue.iid, "state", reason=f"unknown state {state!r} in field")

    identity = render_identity(issue.iid)
    return IssuePageProperties(
        id=RichTextProperty(
            rich_text=[
                RichTextSegment(
                    text=TextContent(content=identity, link=TextLink(url=web_url)),
                    plain_text=identity,
                    href=web_url,
                )
            ]
        ),
        open=CheckboxProperty(checkbox=state == OPEN_STATE),
        title=TitleProperty(title=[RichTextSegment(text=TextContent(content=f"{title_prefix}: {title}"))]),
        notes=RichTextProperty(rich_text=_text_segments(issue.description)),
        assignees=RichTextProperty(rich_text=_text_segments(", ".join(assignee.name for assignee in issue.assignees))),
        last_updated_at=DateProperty(date=DateValue(start=updated_at)),
        type_of_work=MultiSelectProperty(multi_select=[SelectOption(name=TYPE_OF_WORK)]),
        tags=MultiSelectProperty(multi_select=[SelectOption(name=label) for label in issue.labels]),
    )
