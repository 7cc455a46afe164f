"""Assertion helpers for tests that inspect parser Results."""

from __future__ import annotations

from typing import Any, TypeVar

from lndconnect.railway.failure import ErrorKind, FailureDescription
from lndconnect.railway.result import Failure, Result, Success

T = TypeVar("T")


class ResultAssertions:
    @staticmethod
    def assert_success(result: Result[T]) -> T:
        """Return the parsed value, failing the test with the error kind otherwise."""
        match result:
            case Success(value):
                return value
            case Failure(error):
                raise AssertionError(f"Expected Success but got Failure({error.kind.value}: {error.message!r})")
        raise TypeError("unreachable")  # pragma: no cover

    @staticmethod
    def assert_failure(result: Result[T], expected_kind: ErrorKind | None = None) -> FailureDescription:
        """
        Return the failure description, optionally pinning its kind.

            error = ResultAssertions.assert_failure(result, ErrorKind.INVALID_MACAROON)
        """
        match result:
            case Success(value):
                raise AssertionError(f"Expected Failure but got Success({value!r})")
            case Failure(error):
                if expected_kind is not None and error.kind != expected_kind:
                    raise AssertionError(
                        f"Expected error kind {expected_kind.value} but got {error.kind.value}: {error.message!r}"
                    )
                return error
        raise TypeError("unreachable")  # pragma: no cover

    @staticmethod
    def assert_failure_message_contains(result: Result[T], substring: str) -> None:
        message = ResultAssertions.assert_failure(result).message
        assert substring.lower() in message.lower(), f"{substring!r} not in failure message {message!r}"

    @staticmethod
    def assert_success_value(result: Result[T], expected_value: Any) -> None:
        value = ResultAssertions.assert_success(result)
        assert value == expected_value, f"Expected {expected_value!r} but parsed {value!r}"
