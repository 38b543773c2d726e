"""SQLAlchemy integration: annotate every statement an engine executes.

    engine = create_async_engine(settings.database_url)
    hook = install_query_log_hook(engine)
    ...
    remove_query_log_hook(engine)  # or hook.remove()

The hook listens to before_cursor_execute with retval=True and returns the
annotated statement; parameters pass through untouched. Installing also
registers the connection tags (db_host, database, socket) from the engine
URL unless they are already registered.
"""

from __future__ import annotations

import logging
import weakref
from typing import Any

from sqlalchemy import event
from sqlalchemy.engine import URL, Engine
from sqlalchemy.ext.asyncio import AsyncEngine

from query_logs.application.services.query_log_service import QueryLogs, get_query_logs
from query_logs.core.constants import TAG_DATABASE, TAG_DB_HOST, TAG_SOCKET

logger = logging.getLogger(__name__)

_EVENT = "before_cursor_execute"

# Live hooks; each is held strongly only by its engine's listener collection.
_hooks: weakref.WeakSet[QueryLogHook] = weakref.WeakSet()


def _query_value(url: URL, name: str) -> str | None:
    value = url.query.get(name)
    if isinstance(value, tuple):
        return value[0] if value else None
    return value


def connection_tags(url: URL) -> dict[str, str]:
    """Return db_host, database and socket values present in url.

    The socket comes from the unix_socket (MySQL drivers) or host
    (PostgreSQL drivers) query parameter.
    """
    tags = {
        TAG_DB_HOST: url.host,
        TAG_DATABASE: url.database,
        TAG_SOCKET: _query_value(url, "unix_socket") or _query_value(url, "host"),
    }
    return {key: value for key, value in tags.items() if value}


class QueryLogHook:
    """before_cursor_execute listener bound to one engine."""

    def __init__(self, engine: Engine, query_logs: QueryLogs) -> None:
        self.engine = engine
        self.query_logs = query_logs

    def __call__(
        self,
        conn: Any,
        cursor: Any,
        statement: str,
        parameters: Any,
        context: Any,
        executemany: bool,
    ) -> tuple[str, Any]:
        return self.query_logs.annotate(statement), parameters

    @property
    def installed(self) -> bool:
        return event.contains(self.engine, _EVENT, self)

    def remove(self) -> None:
        """Detach the listener (no-op if already removed)."""
        if self.installed:
            event.remove(self.engine, _EVENT, self)
            _hooks.discard(self)
            logger.info("Query log hook removed from %s", self.engine.url)


def install_query_log_hook(
    engine: Engine | AsyncEngine, query_logs: QueryLogs | None = None
) -> QueryLogHook:
    """Annotate every statement executed by engine.

    Args:
        engine: Sync or async SQLAlchemy engine.
        query_logs: Instance to use (defaults to get_query_logs()).

    Returns:
        The installed hook; call hook.remove() to detach it.
    """
    if isinstance(engine, AsyncEngine):
        engine = engine.sync_engine
    query_logs = query_logs or get_query_logs()
    for key, value in connection_tags(engine.url).items():
        query_logs.register_tagging(key, value, overwrite=False)
    hook = QueryLogHook(engine, query_logs)
    event.listen(engine, _EVENT, hook, retval=True)
    _hooks.add(hook)
    logger.info("Query log hook installed on %s", engine.url)
    return hook


def remove_query_log_hook(engine: Engine | AsyncEngine) -> int:
    """Detach every query log hook installed on engine.

    Returns:
        Number of hooks removed.
    """
    if isinstance(engine, AsyncEngine):
        engine = engine.sync_engine
    hooks = [hook for hook in list(_hooks) if hook.engine is engine]
    for hook in hooks:
        hook.remove()
    return len(hooks)
