"""Application layer: rendering services and job tagging."""

from query_logs.application.jobs import tagged_job
from query_logs.application.services import (
    QueryLogs,
    TagRenderer,
    get_query_logs,
    set_query_logs,
)

__all__ = [
    "QueryLogs",
    "TagRenderer",
    "get_query_logs",
    "set_query_logs",
    "tagged_job",
]
