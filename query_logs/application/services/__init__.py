"""Application services: tag rendering and the QueryLogs facade."""

from query_logs.application.services.query_log_service import (
    QueryLogs,
    default_taggings,
    get_query_logs,
    set_query_logs,
)
from query_logs.application.services.tag_renderer import TagRenderer

__all__ = [
    "QueryLogs",
    "TagRenderer",
    "default_taggings",
    "get_query_logs",
    "set_query_logs",
]
