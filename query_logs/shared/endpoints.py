"""Controller and action names for the endpoint serving the current request.

The router records the matched endpoint in the ASGI scope (scope["endpoint"])
after the query log middleware has stored that scope in the context, so both
names are read when a query is annotated, not when the request starts.
"""

import inspect
from collections.abc import Mapping
from typing import Any

from query_logs.core.constants import CONTEXT_ASGI_SCOPE


def _scope_and_endpoint(context: Mapping[str, Any]) -> tuple[Mapping[str, Any], Any]:
    scope = context.get(CONTEXT_ASGI_SCOPE) or {}
    return scope, scope.get("endpoint")


def endpoint_controller(context: Mapping[str, Any]) -> str | None:
    """Module of a function endpoint, or dotted name of a class endpoint."""
    _, endpoint = _scope_and_endpoint(context)
    if endpoint is None:
        return None
    if inspect.isclass(endpoint):
        return f"{endpoint.__module__}.{endpoint.__qualname__}"
    return getattr(endpoint, "__module__", None)


def endpoint_action(context: Mapping[str, Any]) -> str | None:
    """Function name of the endpoint.

    Class endpoints dispatch on the HTTP method, so their action is the
    lower-cased method (get, post, ...).
    """
    scope, endpoint = _scope_and_endpoint(context)
    if endpoint is None:
        return None
    if inspect.isclass(endpoint):
        return scope.get("method", "").lower() or None
    return getattr(endpoint, "__name__", None)
