"""Models for configuration between CLI arguments and environment variables."""

from dataclasses import dataclass
from enum import Enum


class UnparsableIdentityPolicy(str, Enum):
    """What to do with a Notion page whose issue identity cannot be parsed."""

    SKIP = "skip"
    FAIL = "fail"


@dataclass
class SyncConfig:
    """Configuration class for a GitLab to Notion sync run."""

    debug: bool
    gitlab_domain: str
    gitlab_project_id: str
    gitlab_token: str
    notion_key: str
    notion_database_id: str
    assignee_name: str
    title_prefix: str
    batch_size: int
    page_size: int
    max_retries: int
    unparsable_identity_policy: UnparsableIdentityPolicy
    notion_api_url: str
    notion_version: str
