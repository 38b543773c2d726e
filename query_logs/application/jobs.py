"""Job tagging: set the "job" tag while a job function runs."""

import inspect
from collections.abc import Callable
from functools import wraps
from typing import Any

from query_logs.application.services.query_log_service import QueryLogs, get_query_logs
from query_logs.core.constants import TAG_JOB


def tagged_job(
    name: str | None = None,
    query_logs: QueryLogs | None = None,
) -> Callable:
    """Decorator that tags queries issued by a job (sync or async).

    The previous "job" value is restored when the call returns or raises.

    Args:
        name: Tag value (defaults to module.qualname of the function).
        query_logs: Instance to use (defaults to get_query_logs() at call time).

    Returns:
        Decorated function.
    """

    def decorator(func: Callable) -> Callable:
        job_name = name or f"{func.__module__}.{func.__qualname__}"

        @wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            with (query_logs or get_query_logs()).scoped_context({TAG_JOB: job_name}):
                return await func(*args, **kwargs)

        @wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            with (query_logs or get_query_logs()).scoped_context({TAG_JOB: job_name}):
                return func(*args, **kwargs)

        if inspect.iscoroutinefunction(func):
            return async_wrapper
        return sync_wrapper

    return decorator
