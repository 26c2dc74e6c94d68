"""Keeps the tag options of the Notion database in line with the GitLab labels."""

from collections.abc import Sequence

import structlog

from gitlab_notion_sync.notion.abc import MirrorStoreClientBase
from gitlab_notion_sync.schemas.notion import SelectOption
from gitlab_notion_sync.utils.constants import AVAILABLE_COLORS, TAGS_PROPERTY

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def assign_label_colors(label_names: Sequence[str], palette: Sequence[str] = AVAILABLE_COLORS) -> list[SelectOption]:
    """Pair each label with a palette color, round-robin by position.

    Colors follow the position of a label in the list, not its name, so
    reordering the GitLab labels recolors the tags on the next run.
    """
    if not palette:
        raise ValueError("Color palette must not be empty")
    return [SelectOption(name=name, color=palette[position % len(palette)]) for position, name in enumerate(label_names)]


async def sync_label_options(
    store: MirrorStoreClientBase,
    label_names: Sequence[str],
    palette: Sequence[str] = AVAILABLE_COLORS,
) -> list[SelectOption]:
    """Replace the tag options of the database with one option per GitLab label.

    Notion drops or rejects tag values missing from the option set, so this
    must complete before any page is written.
    """
    options = assign_label_colors(label_names, palette)
    await store.update_database_schema(
        {TAGS_PROPERTY: {"multi_select": {"options": [option.model_dump(mode="json") for option in options]}}}
    )
    logger.info("Synchronized Notion tag options with GitLab labels", option_count=len(options))
    return options
