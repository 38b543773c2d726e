"""Domain exceptions for query log tagging.

Configuration problems are raised as QueryLogsException subclasses when
the configuration is set. Errors raised by tag handlers are never wrapped:
they reach the caller of annotate() unchanged.
"""

from typing import Any


class QueryLogsException(Exception):
    """Base exception for all query log tagging errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. the offending entry).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return a serializable representation (error_code, message, details)."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class InvalidTagSpecException(QueryLogsException):
    """Raised when a tag list entry or tagging registry key is malformed."""

    def __init__(self, entry: Any, reason: str) -> None:
        """Initialize with the rejected entry and why it was rejected.

        Args:
            entry: The configuration value that failed validation.
            reason: Short description of the problem.
        """
        super().__init__(
            message=f"Invalid query log tag {entry!r}: {reason}",
            error_code="INVALID_TAG_SPEC",
            details={"entry": repr(entry), "reason": reason},
        )
