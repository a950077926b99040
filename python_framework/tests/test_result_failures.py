"""Tests for ResultFailures convenience factories."""

import asyncio

from railway import ErrorCode
from railway.result_failures import ResultFailures


class TestConvenienceFactories:
    def test_validation_error(self):
        result = ResultFailures.validation_error("Email is required")
        assert result.error().code == ErrorCode.VALIDATION_ERROR
        assert result.error().message == "Email is required"

    def test_not_found_mentions_resource_and_identifier(self):
        result = ResultFailures.not_found("Person", 10)
        assert result.error().code == ErrorCode.NOT_FOUND
        assert result.error().message == "Person not found with identifier: 10"

    def test_authentication_error_keeps_cause(self):
        cause = PermissionError("bad password")
        result = ResultFailures.authentication_error("Login refused", cause)
        assert result.error().code == ErrorCode.AUTHENTICATION_ERROR
        assert result.error().exception is cause

    def test_external_service_error(self):
        result = ResultFailures.external_service_error("Tweet rejected")
        assert result.error().code == ErrorCode.EXTERNAL_SERVICE_ERROR

    def test_cancelled(self):
        cause = asyncio.CancelledError()
        result = ResultFailures.cancelled("Publish cancelled", cause)
        assert result.error().code == ErrorCode.CANCELLED_ERROR
        assert result.error().exception is cause

    def test_other_codes(self):
        assert ResultFailures.business_rule_error("x").error().code == ErrorCode.BUSINESS_RULE_ERROR
        assert ResultFailures.authorization_error("x").error().code == ErrorCode.AUTHORIZATION_ERROR
        assert ResultFailures.technical_error("x").error().code == ErrorCode.TECHNICAL_ERROR
        assert ResultFailures.timeout_error("x").error().code == ErrorCode.TIMEOUT_ERROR
        assert ResultFailures.configuration_error("x").error().code == ErrorCode.CONFIGURATION_ERROR


class TestExceptionMapping:
    def test_from_exception_maps_code_and_keeps_message(self):
        result = ResultFailures.from_exception("lookup failed", LookupError("x"))
        assert result.error().code == ErrorCode.NOT_FOUND
        assert result.error().message == "lookup failed"

    def test_from_exception_auto_uses_exception_text(self):
        result = ResultFailures.from_exception_auto(ConnectionError("offline"))
        assert result.error().code == ErrorCode.EXTERNAL_SERVICE_ERROR
        assert result.error().message == "offline"
