"""
Exceptions raised by an extraction call.

Transport and provider failures (authentication, rate limiting, bad requests)
are not represented here: the openai SDK's own exceptions reach the caller
unchanged.
"""

import json
from typing import Any, Optional


class ExtractionError(Exception):
    """Base exception for all pydantractor errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
            details: Optional dictionary with additional error details
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


class EmptyResponseError(ExtractionError):
    """The provider returned no textual content."""

    def __init__(self, message: str = "API response is empty or invalid", details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message, details)


class MalformedJSONError(ExtractionError, json.JSONDecodeError):
    """
    The provider's content is not valid JSON.

    Also a json.JSONDecodeError, so callers catching the standard parse error
    keep working; msg, doc, pos, lineno and colno mirror the underlying failure.
    """

    def __init__(self, msg: str, doc: str, pos: int) -> None:
        json.JSONDecodeError.__init__(self, msg, doc, pos)
        self.message = f"Malformed JSON in API response: {self.args[0]}"
        self.details = {"pos": pos, "lineno": self.lineno, "colno": self.colno}

    def __str__(self) -> str:
        return self.message


class SchemaValidationError(ExtractionError):
    """
    Parsed JSON does not conform to the caller's schema.

    `issues` holds one entry per offending field:
    {"path": "users.0.age", "message": "Field required", "type": "missing"}
    """

    def __init__(self, issues: list[dict[str, Any]]) -> None:
        self.issues = issues
        super().__init__(
            f"Schema validation error: {json.dumps(issues, default=str)}",
            {"issues": issues},
        )
