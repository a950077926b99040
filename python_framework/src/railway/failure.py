"""
Failure description — structured error information for the failure track.

A failure is a single kind of value: an ErrorCode tag, a human-readable
message and, when the failure came from a raised exception, that exception
(whose __cause__ / __context__ chain stays reachable for diagnostics).

The pipeline core never branches on the ErrorCode; it is metadata for the
caller, who may inspect it (or the wrapped exception) in the failure
continuation.
"""

from __future__ import annotations

import asyncio
import traceback
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum, unique
from typing import Optional


@unique
class ErrorCode(Enum):
    """
    Structured error codes for the failure track.

    - Caller errors: VALIDATION, AUTHENTICATION, AUTHORIZATION, NOT_FOUND, BUSINESS_RULE, RATE_LIMIT
    - Infrastructure errors: TECHNICAL, DATABASE, CONFIGURATION, EXTERNAL_SERVICE, UNAVAILABLE, TIMEOUT, UNKNOWN
    - Host-initiated: CANCELLED
    """

    # --- Caller errors ---
    VALIDATION_ERROR = "VALIDATION_ERROR"
    """Invalid input format, missing fields, type mismatches."""

    AUTHENTICATION_ERROR = "AUTHENTICATION_ERROR"
    """Invalid credentials, expired tokens."""

    AUTHORIZATION_ERROR = "AUTHORIZATION_ERROR"
    """Insufficient permissions."""

    NOT_FOUND = "NOT_FOUND"
    """Record doesn't exist."""

    BUSINESS_RULE_ERROR = "BUSINESS_RULE_ERROR"
    """Domain invariant violated, business constraint failed."""

    RATE_LIMIT_ERROR = "RATE_LIMIT_ERROR"
    """Request limits exceeded."""

    # --- Infrastructure errors ---
    TECHNICAL_ERROR = "TECHNICAL_ERROR"
    """Programming or infrastructure issues."""

    DATABASE_ERROR = "DATABASE_ERROR"
    """Storage connectivity or query failures."""

    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    """System misconfiguration."""

    EXTERNAL_SERVICE_ERROR = "EXTERNAL_SERVICE_ERROR"
    """External API call failures."""

    SERVICE_UNAVAILABLE_ERROR = "SERVICE_UNAVAILABLE_ERROR"
    """Service maintenance or overload."""

    TIMEOUT_ERROR = "TIMEOUT_ERROR"
    """Operation exceeded time limit."""

    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    """Unexpected/unclassified failures."""

    # --- Host-initiated ---
    CANCELLED_ERROR = "CANCELLED_ERROR"
    """The awaited operation was cancelled by the host event loop."""


@dataclass(frozen=True, slots=True)
class FailureDescription:
    """
    Immutable failure descriptor carrying error code, message, optional exception, and timestamp.

    >>> desc = FailureDescription(ErrorCode.VALIDATION_ERROR, "Name is required")
    >>> desc.code
    <ErrorCode.VALIDATION_ERROR: 'VALIDATION_ERROR'>
    >>> desc.message
    'Name is required'
    """

    code: ErrorCode
    message: str
    exception: Optional[BaseException] = field(default=None, repr=False)
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    @staticmethod
    def create(
        code: ErrorCode,
        message: str,
        exception: Optional[BaseException] = None,
    ) -> FailureDescription:
        """Keyword-free factory, handy as a callback."""
        return FailureDescription(code=code, message=message, exception=exception)

    @staticmethod
    def from_exception(
        exception: BaseException,
        message: Optional[str] = None,
        code: Optional[ErrorCode] = None,
    ) -> FailureDescription:
        """
        Describe a raised exception.

        The code defaults to error_code_for(exception); the message defaults
        to the exception text, and a given message is prefixed to it.
        """
        detail = str(exception) or type(exception).__name__
        return FailureDescription(
            code=code or error_code_for(exception),
            message=f"{message}: {detail}" if message else detail,
            exception=exception,
        )

    def full_stack_trace(self) -> str:
        """Message followed by the formatted exception chain, if any."""
        if self.exception is None:
            return self.message
        tb = "".join(traceback.format_exception(type(self.exception), self.exception, self.exception.__traceback__))
        return f"{self.message}\n{tb}"


def error_code_for(exception: BaseException) -> ErrorCode:
    """
    Map a Python exception type to the most appropriate ErrorCode.

    Mapping:
      - asyncio.CancelledError → CANCELLED_ERROR
      - ValueError, TypeError, KeyError → VALIDATION_ERROR
      - LookupError, FileNotFoundError → NOT_FOUND
      - PermissionError → AUTHORIZATION_ERROR
      - TimeoutError → TIMEOUT_ERROR
      - ConnectionError, OSError → EXTERNAL_SERVICE_ERROR
      - Everything else → UNKNOWN_ERROR
    """
    match exception:
        case asyncio.CancelledError():
            return ErrorCode.CANCELLED_ERROR
        case ValueError() | TypeError() | KeyError():
            return ErrorCode.VALIDATION_ERROR
        case LookupError() | FileNotFoundError():
            return ErrorCode.NOT_FOUND
        case PermissionError():
            return ErrorCode.AUTHORIZATION_ERROR
        case TimeoutError():
            return ErrorCode.TIMEOUT_ERROR
        case ConnectionError() | OSError():
            return ErrorCode.EXTERNAL_SERVICE_ERROR
        case _:
            return ErrorCode.UNKNOWN_ERROR
