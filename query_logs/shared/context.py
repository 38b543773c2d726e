"""Query log context management using contextvars.

Holds the key/value context that tag handlers read, plus the cached comment,
separately for each thread and asyncio task. Producers (request middleware,
job runners) populate it; the owner of the unit of work clears it.

Usage:
    context = QueryLogContext()
    context.set_context({"job": "ImportJob"})
    with context.scoped({"path": "/reports"}):
        ...  # path is restored to its previous value (or removed) on exit
    context.clear()

Every write replaces the stored mapping instead of mutating it, so a task
that inherited this context never sees later writes from its parent (and the
other way round).
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, TypeVar

T = TypeVar("T")

# Marks a key that was absent before a scoped update (distinct from None).
_ABSENT = object()

_EMPTY: Mapping[str, Any] = MappingProxyType({})


@dataclass(frozen=True)
class _CachedComment:
    """Comment rendered for one configuration object."""

    config: object
    comment: str | None


class QueryLogContext:
    """Per-execution-unit context store and comment cache slot."""

    def __init__(self, name: str = "query_log") -> None:
        self._values: ContextVar[Mapping[str, Any]] = ContextVar(
            f"{name}_context", default=_EMPTY
        )
        self._cached: ContextVar[_CachedComment | None] = ContextVar(
            f"{name}_cached_comment", default=None
        )

    def get(self, key: str, default: Any = None) -> Any:
        """Return the current value for key, or default if unset."""
        return self._values.get().get(key, default)

    def __contains__(self, key: object) -> bool:
        return key in self._values.get()

    def snapshot(self) -> Mapping[str, Any]:
        """Return a read-only view of the current context."""
        return self._values.get()

    def update(self, updates: Mapping[str, Any]) -> None:
        """Merge updates into the context and invalidate the cached comment."""
        merged = dict(self._values.get())
        merged.update(updates)
        self._values.set(MappingProxyType(merged))
        self.invalidate()

    def set_context(
        self,
        updates: Mapping[str, Any],
        body: Callable[[], T] | None = None,
    ) -> T | None:
        """Update the context, optionally only for the duration of body.

        Without body the update is permanent (until cleared or overwritten).
        With body, the previous values of exactly the updated keys are
        restored after body returns or raises; keys that were absent are
        removed again.

        Returns:
            body()'s result, or None when no body is given.
        """
        if body is None:
            self.update(updates)
            return None
        with self.scoped(updates):
            return body()

    @contextmanager
    def scoped(self, updates: Mapping[str, Any]) -> Iterator[None]:
        """Apply updates for the duration of the with block.

        Nested scopes restore to the enclosing scope's value, not to the
        value before the outermost scope.
        """
        current = self._values.get()
        previous = {key: current.get(key, _ABSENT) for key in updates}
        self.update(updates)
        try:
            yield
        finally:
            self._restore(previous)

    def _restore(self, previous: Mapping[str, Any]) -> None:
        restored = dict(self._values.get())
        for key, value in previous.items():
            if value is _ABSENT:
                restored.pop(key, None)
            else:
                restored[key] = value
        self._values.set(MappingProxyType(restored))
        self.invalidate()

    def clear(self) -> None:
        """Empty the context for the current execution unit."""
        self._values.set(_EMPTY)
        self.invalidate()

    # ---- Cached comment ----

    def cached_comment(self, config: object) -> _CachedComment | None:
        """Return the cached entry if it was rendered for this configuration."""
        cached = self._cached.get()
        if cached is not None and cached.config is config:
            return cached
        return None

    def store_comment(self, config: object, comment: str | None) -> None:
        """Cache comment (None included) for the given configuration."""
        self._cached.set(_CachedComment(config=config, comment=comment))

    def invalidate(self) -> None:
        """Drop the cached comment for the current execution unit."""
        self._cached.set(None)
