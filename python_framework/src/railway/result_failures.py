"""
Convenience factory methods for common Result failures.

    from railway.result_failures import ResultFailures

    # Instead of:
    Result.failure(ErrorCode.NOT_FOUND, "Person not found with identifier: 10")

    # Write:
    ResultFailures.not_found("Person", 10)
"""

from __future__ import annotations

from typing import Any, TypeVar

from railway.failure import ErrorCode, error_code_for
from railway.result import Result

T = TypeVar("T")


class ResultFailures:
    """Factory methods for common failure types."""

    @staticmethod
    def validation_error(message: str) -> Result:
        """Invalid input — missing fields, wrong format, type mismatch."""
        return Result.failure(ErrorCode.VALIDATION_ERROR, message)

    @staticmethod
    def business_rule_error(message: str) -> Result:
        return Result.failure(ErrorCode.BUSINESS_RULE_ERROR, message)

    @staticmethod
    def not_found(resource_type: str, identifier: Any) -> Result:
        return Result.failure(
            ErrorCode.NOT_FOUND,
            f"{resource_type} not found with identifier: {identifier}",
        )

    @staticmethod
    def authentication_error(message: str, exception: BaseException | None = None) -> Result:
        """Invalid credentials or expired token."""
        return Result.failure(ErrorCode.AUTHENTICATION_ERROR, message, exception)

    @staticmethod
    def authorization_error(message: str) -> Result:
        return Result.failure(ErrorCode.AUTHORIZATION_ERROR, message)

    @staticmethod
    def technical_error(message: str, exception: BaseException | None = None) -> Result:
        return Result.failure(ErrorCode.TECHNICAL_ERROR, message, exception)

    @staticmethod
    def external_service_error(message: str, exception: BaseException | None = None) -> Result:
        """External API call failure."""
        return Result.failure(ErrorCode.EXTERNAL_SERVICE_ERROR, message, exception)

    @staticmethod
    def timeout_error(message: str) -> Result:
        return Result.failure(ErrorCode.TIMEOUT_ERROR, message)

    @staticmethod
    def cancelled(message: str, exception: BaseException | None = None) -> Result:
        """The awaited operation was cancelled by the host."""
        return Result.failure(ErrorCode.CANCELLED_ERROR, message, exception)

    @staticmethod
    def configuration_error(message: str) -> Result:
        return Result.failure(ErrorCode.CONFIGURATION_ERROR, message)

    @staticmethod
    def from_exception(message: str, exception: BaseException) -> Result:
        """
        Failure with the ErrorCode picked from the exception type.

        See railway.failure.error_code_for for the mapping.
        """
        return Result.failure(error_code_for(exception), message, exception)

    @staticmethod
    def from_exception_auto(exception: BaseException) -> Result:
        """Map exception using its own message."""
        return Result.failure(error_code_for(exception), str(exception), exception)
