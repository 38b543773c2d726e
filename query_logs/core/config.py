"""Query log configuration (settings and environment).

Uses pydantic-settings with .env support. Only the startup defaults live
here; the runtime configuration is the immutable QueryLogConfiguration held
by QueryLogs, which may be swapped at any time.
"""

import re
from functools import lru_cache

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_TAG_KEY_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class Settings(BaseSettings):
    """Settings loaded from environment and .env."""

    # Value of the built-in "application" tag.
    app_name: str = "app"

    # Comma-separated bare tag keys, e.g. "application,pid,path,request_id"
    query_log_tags: str = "application"
    query_log_prepend_comment: bool = False
    query_log_cache_tags: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @property
    def query_log_tag_list(self) -> list[str]:
        """Parsed query_log_tags, in order, without blanks."""
        return [t.strip() for t in self.query_log_tags.split(",") if t.strip()]

    @model_validator(mode="after")
    def validate_tag_keys(self) -> "Settings":
        """Reject tag keys that are not identifiers (QUERY_LOG_TAGS)."""
        invalid = [t for t in self.query_log_tag_list if not _TAG_KEY_RE.match(t)]
        if invalid:
            raise ValueError(
                f"QUERY_LOG_TAGS contains invalid tag names: {', '.join(invalid)}. "
                "Use letters, digits and underscores."
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached settings (single instance per process).

    In tests, call get_settings.cache_clear() after changing env vars so the
    next call picks up the new values.
    """
    return Settings()
