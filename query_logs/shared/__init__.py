"""Shared utilities: context store, endpoint resolvers, telemetry and escaping helpers.

Used by domain, application, and infrastructure.
"""

from query_logs.shared.context import QueryLogContext
from query_logs.shared.utils import escape_sql_comment

__all__ = [
    "QueryLogContext",
    "escape_sql_comment",
]
