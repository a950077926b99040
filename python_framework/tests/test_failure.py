"""Tests for FailureDescription, ErrorCode and the exception → code mapping."""

import asyncio

import pytest

from railway import ErrorCode, FailureDescription, error_code_for


class TestErrorCode:
    def test_all_14_error_codes_exist(self):
        assert len(list(ErrorCode)) == 14

    def test_cancelled_code_exists(self):
        assert ErrorCode.CANCELLED_ERROR.value == "CANCELLED_ERROR"

    def test_error_code_values_match_names(self):
        for code in ErrorCode:
            assert code.value == code.name


class TestFailureDescription:
    def test_creation_with_code_and_message(self):
        desc = FailureDescription(ErrorCode.NOT_FOUND, "Person 10 not found")
        assert desc.code == ErrorCode.NOT_FOUND
        assert desc.message == "Person 10 not found"
        assert desc.exception is None
        assert desc.timestamp.tzinfo is not None

    def test_factory_method(self):
        desc = FailureDescription.create(ErrorCode.AUTHENTICATION_ERROR, "denied")
        assert desc.code == ErrorCode.AUTHENTICATION_ERROR

    def test_immutability(self):
        desc = FailureDescription(ErrorCode.VALIDATION_ERROR, "test")
        with pytest.raises(AttributeError):
            desc.message = "changed"  # type: ignore

    def test_full_stack_trace_without_exception(self):
        desc = FailureDescription(ErrorCode.VALIDATION_ERROR, "just a message")
        assert desc.full_stack_trace() == "just a message"

    def test_full_stack_trace_includes_cause_chain(self):
        try:
            try:
                raise ConnectionError("socket closed")
            except ConnectionError as cause:
                raise RuntimeError("tweet failed") from cause
        except RuntimeError as e:
            desc = FailureDescription(ErrorCode.EXTERNAL_SERVICE_ERROR, "publish failed", e)

        trace = desc.full_stack_trace()
        assert trace.startswith("publish failed")
        assert "socket closed" in trace
        assert "tweet failed" in trace


class TestFromException:
    def test_uses_exception_text_as_message(self):
        desc = FailureDescription.from_exception(LookupError("Person 10 not found"))
        assert desc.code == ErrorCode.NOT_FOUND
        assert desc.message == "Person 10 not found"

    def test_prefixes_given_message(self):
        desc = FailureDescription.from_exception(RuntimeError("HTTP 500"), "Registration failed")
        assert desc.message == "Registration failed: HTTP 500"

    def test_explicit_code_wins(self):
        desc = FailureDescription.from_exception(
            RuntimeError("x"), code=ErrorCode.EXTERNAL_SERVICE_ERROR
        )
        assert desc.code == ErrorCode.EXTERNAL_SERVICE_ERROR

    def test_empty_exception_text_falls_back_to_type_name(self):
        desc = FailureDescription.from_exception(asyncio.CancelledError())
        assert desc.message == "CancelledError"


class TestErrorCodeFor:
    @pytest.mark.parametrize(
        ("exception", "expected"),
        [
            (ValueError("x"), ErrorCode.VALIDATION_ERROR),
            (TypeError("x"), ErrorCode.VALIDATION_ERROR),
            (KeyError("x"), ErrorCode.VALIDATION_ERROR),
            (LookupError("x"), ErrorCode.NOT_FOUND),
            (FileNotFoundError("x"), ErrorCode.NOT_FOUND),
            (PermissionError("x"), ErrorCode.AUTHORIZATION_ERROR),
            (TimeoutError("x"), ErrorCode.TIMEOUT_ERROR),
            (ConnectionError("x"), ErrorCode.EXTERNAL_SERVICE_ERROR),
            (OSError("x"), ErrorCode.EXTERNAL_SERVICE_ERROR),
            (asyncio.CancelledError(), ErrorCode.CANCELLED_ERROR),
            (RuntimeError("x"), ErrorCode.UNKNOWN_ERROR),
        ],
    )
    def test_mapping(self, exception, expected):
        assert error_code_for(exception) is expected
