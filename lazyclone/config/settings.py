from __future__ import annotations

from dotenv import load_dotenv
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..core.constants import (
    API_BASE,
    DEFAULT_CONCURRENCY,
    DEFAULT_INCLUDE_ARCHIVED,
    DEFAULT_INCLUDE_FORKS,
    GH_HOST,
    GH_REPO_LIMIT,
    HTTP_TIMEOUT_SEC,
)

# Load .env once, early
load_dotenv()


class Settings(BaseSettings):
    """Application config (env or .env)."""

    model_config = SettingsConfigDict(env_prefix="LAZY_CLONE_", env_file=None, extra="ignore")

    github_token: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GH_TOKEN", "GITHUB_TOKEN", "LAZY_CLONE_GITHUB_TOKEN"),
    )
    api_base: str = API_BASE
    gh_host: str = GH_HOST
    gh_repo_limit: int = Field(default=GH_REPO_LIMIT, ge=1)
    http_timeout: float = HTTP_TIMEOUT_SEC
    default_concurrency: int = Field(default=DEFAULT_CONCURRENCY, ge=1)
    default_include_archived: bool = DEFAULT_INCLUDE_ARCHIVED
    default_include_forks: bool = DEFAULT_INCLUDE_FORKS


def get_settings() -> Settings:
    return Settings()
