"""Shared telemetry: tracing helpers."""

from query_logs.shared.telemetry.tracing import get_span_id, get_trace_id

__all__ = ["get_trace_id", "get_span_id"]
