"""Shared utilities: comment escaping."""

from query_logs.shared.utils.sanitization import escape_sql_comment

__all__ = ["escape_sql_comment"]
