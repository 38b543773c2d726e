"""Domain: tag handlers, tag specifications, configuration and exceptions."""

from query_logs.domain.exceptions import InvalidTagSpecException, QueryLogsException
from query_logs.domain.tags import (
    ContextProducerTag,
    ProducerTag,
    QueryLogConfiguration,
    StaticTag,
    TagHandler,
    as_tag_handler,
    normalize_taggings,
    normalize_tags,
)

__all__ = [
    "QueryLogsException",
    "InvalidTagSpecException",
    "StaticTag",
    "ProducerTag",
    "ContextProducerTag",
    "TagHandler",
    "QueryLogConfiguration",
    "as_tag_handler",
    "normalize_tags",
    "normalize_taggings",
]
