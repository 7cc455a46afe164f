"""Tests for ErrorKind, FailureDescription and the ResultAssertions test helper."""

from __future__ import annotations

import pytest

from lndconnect.railway import ErrorKind, FailureDescription, Result, ResultAssertions


class TestErrorKind:
    def test_exactly_five_kinds_exist(self):
        assert len(list(ErrorKind)) == 5

    def test_legacy_codes_follow_declaration_order(self):
        assert ErrorKind.INVALID_CONNECT_STRING.code == 0
        assert ErrorKind.NO_MACAROON.code == 1
        assert ErrorKind.INVALID_CERTIFICATE.code == 2
        assert ErrorKind.INVALID_MACAROON.code == 3
        assert ErrorKind.INVALID_HOST_OR_PORT.code == 4


class TestFailureDescription:
    def test_creation_with_kind_and_message(self):
        desc = FailureDescription(ErrorKind.NO_MACAROON, "no macaroon")
        assert desc.kind == ErrorKind.NO_MACAROON
        assert desc.message == "no macaroon"
        assert desc.exception is None
        assert desc.timestamp.tzinfo is not None

    def test_immutability(self):
        desc = FailureDescription(ErrorKind.NO_MACAROON, "test")
        with pytest.raises(AttributeError):
            desc.message = "changed"  # type: ignore[misc]


class TestResultAssertions:
    def test_assert_success_returns_value(self):
        assert ResultAssertions.assert_success(Result.success(42)) == 42

    def test_assert_success_fails_on_failure(self):
        result = Result.failure(ErrorKind.NO_MACAROON, "missing")
        with pytest.raises(AssertionError, match="Expected Success but got Failure"):
            ResultAssertions.assert_success(result)

    def test_assert_failure_checks_kind(self):
        result = Result.failure(ErrorKind.NO_MACAROON, "missing")
        error = ResultAssertions.assert_failure(result, ErrorKind.NO_MACAROON)
        assert error.message == "missing"

    def test_assert_failure_reports_wrong_kind(self):
        result = Result.failure(ErrorKind.NO_MACAROON, "missing")
        with pytest.raises(AssertionError, match="Expected error kind INVALID_MACAROON"):
            ResultAssertions.assert_failure(result, ErrorKind.INVALID_MACAROON)

    def test_assert_failure_fails_on_success(self):
        with pytest.raises(AssertionError, match="Expected Failure but got Success"):
            ResultAssertions.assert_failure(Result.success(1))

    def test_assert_failure_message_contains(self):
        result = Result.failure(ErrorKind.NO_MACAROON, "Connect string does not include a macaroon")
        ResultAssertions.assert_failure_message_contains(result, "MACAROON")

    def test_assert_success_value(self):
        ResultAssertions.assert_success_value(Result.success("a"), "a")
