"""Tag specifications, tag handlers and the query log configuration.

A tag list is an ordered sequence of bare keys and/or mappings of
key -> handler. It is normalized once, when configured, into a flat tuple of
(key, handler-or-None) pairs so rendering never has to inspect the raw
configuration again.

Handlers are a closed set of variants:

    StaticTag(value)            constant value
    ProducerTag(fn)             fn() -> value
    ContextProducerTag(fn)      fn(context_snapshot) -> value

Plain values and callables given by users are converted with as_tag_handler().
"""

from __future__ import annotations

import inspect
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Union

from query_logs.core.constants import DEFAULT_TAGS
from query_logs.domain.exceptions import InvalidTagSpecException


@dataclass(frozen=True)
class StaticTag:
    """Tag whose value is a constant."""

    value: Any


@dataclass(frozen=True)
class ProducerTag:
    """Tag whose value is computed by a zero-argument callable."""

    producer: Callable[[], Any]


@dataclass(frozen=True)
class ContextProducerTag:
    """Tag whose value is computed from the current context snapshot."""

    producer: Callable[[Mapping[str, Any]], Any]


TagHandler = Union[StaticTag, ProducerTag, ContextProducerTag]

# (key, explicit handler or None) in output order.
TagEntry = tuple[str, TagHandler | None]


_POSITIONAL_KINDS = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
    inspect.Parameter.VAR_POSITIONAL,
)


def _accepts_positional(func: Callable[..., Any]) -> bool:
    """Return True if func takes a positional argument (required, optional or *args)."""
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return False
    return any(param.kind in _POSITIONAL_KINDS for param in signature.parameters.values())


def as_tag_handler(value: Any) -> TagHandler:
    """Convert a user-supplied handler to a TagHandler variant.

    Variants pass through. Callables that accept a positional argument
    (required, defaulted, or *args) become ContextProducerTag and receive the
    context; callables taking none become ProducerTag. Callables without an
    inspectable signature (some builtins) are treated as producers. Anything
    else is a static value.
    """
    if isinstance(value, (StaticTag, ProducerTag, ContextProducerTag)):
        return value
    if callable(value):
        if _accepts_positional(value):
            return ContextProducerTag(value)
        return ProducerTag(value)
    return StaticTag(value)


def _validate_key(key: Any, entry: Any) -> str:
    if not isinstance(key, str) or not key:
        raise InvalidTagSpecException(entry, "tag keys must be non-empty strings")
    return key


def normalize_tags(tags: Iterable[str | Mapping[str, Any]]) -> tuple[TagEntry, ...]:
    """Flatten a tag list into ordered (key, handler) pairs.

    Args:
        tags: Bare keys and/or mappings of key -> handler. A handler of None
            means "no explicit handler" (registry or context lookup applies).

    Returns:
        Tuple of (key, TagHandler | None) in configured order.

    Raises:
        InvalidTagSpecException: If an entry is neither a non-empty string nor
            a mapping with non-empty string keys.
    """
    if isinstance(tags, (str, Mapping)):
        tags = [tags]
    entries: list[TagEntry] = []
    for entry in tags:
        if isinstance(entry, str):
            entries.append((_validate_key(entry, entry), None))
        elif isinstance(entry, Mapping):
            for key, handler in entry.items():
                _validate_key(key, entry)
                entries.append((key, None if handler is None else as_tag_handler(handler)))
        else:
            raise InvalidTagSpecException(entry, "expected a tag name or a mapping")
    return tuple(entries)


def normalize_taggings(taggings: Mapping[str, Any]) -> Mapping[str, TagHandler]:
    """Return a read-only registry with every handler converted to a TagHandler."""
    registry: dict[str, TagHandler] = {}
    for key, handler in taggings.items():
        _validate_key(key, key)
        registry[key] = as_tag_handler(handler)
    return MappingProxyType(registry)


@dataclass(frozen=True)
class QueryLogConfiguration:
    """Immutable query log configuration.

    Swapped as a whole (see QueryLogs.configure), so readers never observe a
    half-applied update.
    """

    tags: tuple[TagEntry, ...] = field(default_factory=lambda: normalize_tags(DEFAULT_TAGS))
    taggings: Mapping[str, TagHandler] = field(
        default_factory=lambda: MappingProxyType({})
    )
    prepend_comment: bool = False
    cache_tags: bool = False

    @classmethod
    def build(
        cls,
        tags: Iterable[str | Mapping[str, Any]] = DEFAULT_TAGS,
        taggings: Mapping[str, Any] | None = None,
        prepend_comment: bool = False,
        cache_tags: bool = False,
    ) -> QueryLogConfiguration:
        """Build a configuration from raw (unnormalized) values."""
        return cls(
            tags=normalize_tags(tags),
            taggings=normalize_taggings(taggings or {}),
            prepend_comment=prepend_comment,
            cache_tags=cache_tags,
        )

    def with_tagging(self, key: str, handler: Any) -> QueryLogConfiguration:
        """Return a copy with one registry entry added or replaced."""
        registry = dict(self.taggings)
        registry[_validate_key(key, key)] = as_tag_handler(handler)
        return replace(self, taggings=MappingProxyType(registry))

    @property
    def tag_keys(self) -> list[str]:
        """Configured tag keys in output order."""
        return [key for key, _ in self.tags]
