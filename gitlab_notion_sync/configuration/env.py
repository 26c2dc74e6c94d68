"""Pydantic Settings model for application configuration."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from gitlab_notion_sync.configuration.models import UnparsableIdentityPolicy
from gitlab_notion_sync.notion.client import DEFAULT_NOTION_API_URL, DEFAULT_NOTION_VERSION
from gitlab_notion_sync.utils.constants import DEFAULT_BATCH_SIZE, DEFAULT_PAGE_SIZE


class Settings(BaseSettings):
    """Environment variable settings for the application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Generic application-wide settings
    DEBUG: bool = False

    # GitLab API settings
    GITLAB_DOMAIN: str | None = None
    GITLAB_PROJECT_ID: str | None = None
    GITLAB_TOKEN: str | None = None

    # Notion API settings
    NOTION_KEY: str | None = None
    NOTION_DATABASE_ID: str | None = None
    NOTION_API_URL: str = DEFAULT_NOTION_API_URL
    NOTION_VERSION: str = DEFAULT_NOTION_VERSION

    # Sync settings
    ASSIGNEE_NAME: str | None = None
    TITLE_PREFIX: str | None = None
    BATCH_SIZE: int = DEFAULT_BATCH_SIZE
    PAGE_SIZE: int = DEFAULT_PAGE_SIZE
    MAX_RETRIES: int = 0
    UNPARSABLE_IDENTITY_POLICY: UnparsableIdentityPolicy = UnparsableIdentityPolicy.SKIP


settings = Settings()
