"""QueryLogs: process-wide tagging configuration plus the per-unit context.

Typical wiring at startup:

    query_logs = QueryLogs.from_settings()
    query_logs.configure(
        tags=[
            "application",
            "request_id",
            {"tenant": lambda ctx: ctx.get("tenant_id"), "host": socket.gethostname},
        ],
        cache_tags=True,
    )

and on the query path:

    sql = query_logs.annotate(sql)
"""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Callable, Iterable, Iterator, Mapping
from contextlib import contextmanager
from dataclasses import replace
from typing import Any, TypeVar

from query_logs.application.services.tag_renderer import TagRenderer
from query_logs.core.config import Settings, get_settings
from query_logs.core.constants import (
    DEFAULT_TAGS,
    TAG_ACTION,
    TAG_APPLICATION,
    TAG_CONTROLLER,
    TAG_PID,
    TAG_SPAN_ID,
    TAG_TRACE_ID,
)
from query_logs.domain.tags import (
    ContextProducerTag,
    ProducerTag,
    QueryLogConfiguration,
    StaticTag,
    TagHandler,
    normalize_taggings,
    normalize_tags,
)
from query_logs.shared.context import QueryLogContext
from query_logs.shared.endpoints import endpoint_action, endpoint_controller
from query_logs.shared.telemetry.tracing import get_span_id, get_trace_id

logger = logging.getLogger(__name__)

T = TypeVar("T")

_UNSET: Any = object()


def default_taggings(app_name: str) -> dict[str, TagHandler]:
    """Return the built-in tagging registry."""
    return {
        TAG_APPLICATION: StaticTag(app_name),
        TAG_PID: ProducerTag(os.getpid),
        TAG_TRACE_ID: ProducerTag(get_trace_id),
        TAG_SPAN_ID: ProducerTag(get_span_id),
        TAG_CONTROLLER: ContextProducerTag(endpoint_controller),
        TAG_ACTION: ContextProducerTag(endpoint_action),
    }


class QueryLogs:
    """Annotates SQL with tags built from configuration and the current context.

    The configuration is immutable and replaced as a whole under a lock, so
    annotate() reads it without locking. Context and cached comment are per
    thread / asyncio task (see QueryLogContext).
    """

    def __init__(
        self,
        config: QueryLogConfiguration | None = None,
        context: QueryLogContext | None = None,
    ) -> None:
        self._config = config or QueryLogConfiguration()
        self.context = context or QueryLogContext()
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> QueryLogs:
        """Build an instance from settings with the built-in taggings registered."""
        settings = settings or get_settings()
        config = QueryLogConfiguration.build(
            tags=settings.query_log_tag_list or DEFAULT_TAGS,
            taggings=default_taggings(settings.app_name),
            prepend_comment=settings.query_log_prepend_comment,
            cache_tags=settings.query_log_cache_tags,
        )
        return cls(config=config)

    # ---- Configuration ----

    @property
    def config(self) -> QueryLogConfiguration:
        return self._config

    def configure(
        self,
        *,
        tags: Iterable[str | Mapping[str, Any]] = _UNSET,
        taggings: Mapping[str, Any] = _UNSET,
        prepend_comment: bool = _UNSET,
        cache_tags: bool = _UNSET,
    ) -> QueryLogConfiguration:
        """Replace some or all configuration values.

        Omitted arguments keep their current value. Tags and taggings are
        validated before anything is swapped in.

        Raises:
            InvalidTagSpecException: If a tag entry or tagging key is malformed.
        """
        changes: dict[str, Any] = {}
        if tags is not _UNSET:
            changes["tags"] = normalize_tags(tags)
        if taggings is not _UNSET:
            changes["taggings"] = normalize_taggings(taggings)
        if prepend_comment is not _UNSET:
            changes["prepend_comment"] = bool(prepend_comment)
        if cache_tags is not _UNSET:
            changes["cache_tags"] = bool(cache_tags)
        with self._lock:
            self._config = replace(self._config, **changes)
            config = self._config
        logger.info(
            "Query log tags configured: tags=%s prepend=%s cache=%s",
            config.tag_keys,
            config.prepend_comment,
            config.cache_tags,
        )
        return config

    def register_tagging(self, key: str, handler: Any, *, overwrite: bool = True) -> bool:
        """Add a registry handler used for bare tags named key.

        Returns:
            True if registered; False if key exists and overwrite is False.
        """
        with self._lock:
            if not overwrite and key in self._config.taggings:
                return False
            self._config = self._config.with_tagging(key, handler)
        logger.info("Query log tagging registered: %s", key)
        return True

    # ---- Context ----

    def set_context(
        self,
        updates: Mapping[str, Any] | None = None,
        body: Callable[[], T] | None = None,
        **values: Any,
    ) -> T | None:
        """Update the context; with body, only while body runs.

        Updates may be given as a mapping, as keyword arguments, or both.
        """
        merged = {**(updates or {}), **values}
        return self.context.set_context(merged, body)

    @contextmanager
    def scoped_context(
        self, updates: Mapping[str, Any] | None = None, **values: Any
    ) -> Iterator[None]:
        """Context manager form of set_context with a body."""
        with self.context.scoped({**(updates or {}), **values}):
            yield

    def clear_context(self) -> None:
        """Empty the context for the current execution unit."""
        self.context.clear()

    # ---- Rendering ----

    def renderer(self) -> TagRenderer:
        return TagRenderer(self._config, self.context)

    def comment(self) -> str | None:
        """Return the current comment (cached when cache_tags is on)."""
        return self.renderer().comment()

    def annotate(self, sql: str) -> str:
        """Return sql with the query log comment prepended or appended."""
        return self.renderer().annotate(sql)

    __call__ = annotate


_default: QueryLogs | None = None
_default_lock = threading.Lock()


def get_query_logs() -> QueryLogs:
    """Return the process-wide QueryLogs, created from settings on first use."""
    global _default
    if _default is None:
        with _default_lock:
            if _default is None:
                _default = QueryLogs.from_settings()
    return _default


def set_query_logs(query_logs: QueryLogs | None) -> None:
    """Replace the process-wide QueryLogs (None resets to lazy creation)."""
    global _default
    with _default_lock:
        _default = query_logs
