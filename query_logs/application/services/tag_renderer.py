"""Renders query log tags into a SQL comment and attaches it to queries."""

from __future__ import annotations

from typing import Any

from query_logs.core.constants import (
    COMMENT_CLOSE,
    COMMENT_OPEN,
    KEY_VALUE_SEPARATOR,
    TAG_SEPARATOR,
)
from query_logs.domain.tags import (
    ContextProducerTag,
    ProducerTag,
    QueryLogConfiguration,
    StaticTag,
    TagHandler,
)
from query_logs.shared.context import QueryLogContext
from query_logs.shared.utils.sanitization import escape_sql_comment


class TagRenderer:
    """Builds ``/*key:value,...*/`` from a configuration and a context store.

    Handler errors are not caught; they propagate to the caller of
    render()/annotate().
    """

    def __init__(self, config: QueryLogConfiguration, context: QueryLogContext) -> None:
        self.config = config
        self.context = context

    def _resolve(self, key: str, handler: TagHandler | None) -> Any:
        match handler:
            case None:
                return self.context.get(key)
            case StaticTag(value=value):
                return value
            case ProducerTag(producer=producer):
                return producer()
            case ContextProducerTag(producer=producer):
                return producer(self.context.snapshot())
        raise TypeError(f"Unsupported tag handler for {key!r}: {handler!r}")

    def tag_content(self) -> str:
        """Return the comma-joined ``key:value`` fragments, skipping None values."""
        fragments = []
        taggings = self.config.taggings
        for key, handler in self.config.tags:
            value = self._resolve(key, handler or taggings.get(key))
            if value is not None:
                fragments.append(f"{key}{KEY_VALUE_SEPARATOR}{value}")
        return TAG_SEPARATOR.join(fragments)

    def render(self) -> str | None:
        """Return the escaped, wrapped comment, or None when no tag has a value."""
        content = self.tag_content()
        if not content:
            return None
        body = escape_sql_comment(content)
        # A trailing "/" would read as "/*" together with the closer.
        if body.endswith("/"):
            body += " "
        return f"{COMMENT_OPEN}{body}{COMMENT_CLOSE}"

    def comment(self) -> str | None:
        """Return render(), served from the per-unit cache when caching is on."""
        if not self.config.cache_tags:
            return self.render()
        cached = self.context.cached_comment(self.config)
        if cached is not None:
            return cached.comment
        comment = self.render()
        self.context.store_comment(self.config, comment)
        return comment

    def annotate(self, sql: str) -> str:
        """Attach the comment to sql (prefix or suffix), stripped of outer whitespace."""
        comment = self.comment()
        if comment is None:
            return sql.strip()
        if self.config.prepend_comment:
            return f"{comment} {sql}".strip()
        return f"{sql} {comment}".strip()
