"""Query log tags: annotate SQL with the application context that issued it.

    from query_logs import annotate, set_context

    set_context({"job": "NightlyImport"})
    annotate("SELECT 1")  # "SELECT 1 /*application:app,job:NightlyImport*/"

The module-level helpers use the process-wide QueryLogs from
get_query_logs(); create QueryLogs instances directly for explicit wiring.
"""

from collections.abc import Callable, Mapping
from typing import Any

from query_logs.application import (
    QueryLogs,
    TagRenderer,
    get_query_logs,
    set_query_logs,
    tagged_job,
)
from query_logs.domain import (
    ContextProducerTag,
    InvalidTagSpecException,
    ProducerTag,
    QueryLogConfiguration,
    QueryLogsException,
    StaticTag,
)
from query_logs.shared import QueryLogContext, escape_sql_comment


def annotate(sql: str) -> str:
    """Return sql with the current query log comment attached."""
    return get_query_logs().annotate(sql)


def set_context(
    updates: Mapping[str, Any] | None = None,
    body: Callable[[], Any] | None = None,
    **values: Any,
) -> Any:
    """Update the query log context; with body, only while body runs."""
    return get_query_logs().set_context(updates, body, **values)


def clear_context() -> None:
    """Empty the query log context for the current thread or task."""
    get_query_logs().clear_context()


__all__ = [
    "annotate",
    "set_context",
    "clear_context",
    "QueryLogs",
    "QueryLogContext",
    "QueryLogConfiguration",
    "TagRenderer",
    "StaticTag",
    "ProducerTag",
    "ContextProducerTag",
    "QueryLogsException",
    "InvalidTagSpecException",
    "escape_sql_comment",
    "get_query_logs",
    "set_query_logs",
    "tagged_job",
]
