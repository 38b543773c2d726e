"""ASGI middleware that populates the query log context.

Wrap it inside the request ID middleware so scope state already carries
request_id when it runs.
"""

from query_logs.middleware.query_log_context import QueryLogContextMiddleware

__all__ = ["QueryLogContextMiddleware"]
