"""Pytest configuration and fixtures for query_logs.

Each QueryLogs instance owns its own context variables, so tests that build
their own instance never see context left over by another test. The
process-wide instance and the settings cache are reset after every test.
"""

import pytest

from query_logs import QueryLogConfiguration, QueryLogs, set_query_logs
from query_logs.core.config import get_settings


@pytest.fixture(autouse=True)
def reset_process_defaults(monkeypatch: pytest.MonkeyPatch):
    """Clear cached settings and the default QueryLogs around each test."""
    for name in (
        "APP_NAME",
        "QUERY_LOG_TAGS",
        "QUERY_LOG_PREPEND_COMMENT",
        "QUERY_LOG_CACHE_TAGS",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    set_query_logs(None)
    yield
    get_settings.cache_clear()
    set_query_logs(None)


@pytest.fixture
def query_logs() -> QueryLogs:
    """QueryLogs tagging only application=myapp."""
    return QueryLogs(
        QueryLogConfiguration.build(
            tags=["application"],
            taggings={"application": "myapp"},
        )
    )
