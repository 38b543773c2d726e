"""Persistence: SQLAlchemy hook that annotates executed statements."""

from query_logs.infrastructure.persistence.query_log_hook import (
    QueryLogHook,
    connection_tags,
    install_query_log_hook,
    remove_query_log_hook,
)

__all__ = ["QueryLogHook", "connection_tags", "install_query_log_hook", "remove_query_log_hook"]
