"""Query log context middleware.

Sets the request tags (path, method, request_id) for queries issued while a
request is handled, and restores the previous context when it finishes. The
ASGI scope itself is stored too: the router adds the matched endpoint to it
later, which is where the controller and action tags come from.
Uses raw ASGI (no BaseHTTPMiddleware) so the context is set in the task that
runs the endpoint.
"""

from typing import Any, Callable

from query_logs.application.services.query_log_service import QueryLogs, get_query_logs
from query_logs.core.constants import CONTEXT_ASGI_SCOPE, TAG_METHOD, TAG_PATH, TAG_REQUEST_ID


def _request_tags(scope: dict) -> dict[str, Any]:
    """Return the context values for an http scope; request_id only when known."""
    tags: dict[str, Any] = {
        TAG_PATH: scope.get("path", ""),
        TAG_METHOD: scope.get("method", ""),
        CONTEXT_ASGI_SCOPE: scope,
    }
    request_id = scope.get("state", {}).get("request_id")
    if request_id:
        tags[TAG_REQUEST_ID] = request_id
    return tags


def QueryLogContextMiddleware(
    app: Callable, query_logs: QueryLogs | None = None
) -> Callable:
    """Scope query log request tags to each HTTP request. Raw ASGI."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        with (query_logs or get_query_logs()).scoped_context(_request_tags(scope)):
            await app(scope, receive, send)

    return asgi_app
