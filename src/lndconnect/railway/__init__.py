"""
Railway-Oriented Programming (ROP) primitives for connect-string parsing.

Explicit, composable error handling — no exceptions cross the parser boundary.

    from lndconnect.railway import ErrorKind, Result

    def require_port(port: int | None) -> Result[int]:
        if port is None:
            return Result.failure(ErrorKind.INVALID_HOST_OR_PORT, "No port given")
        return Result.success(port)
"""

from lndconnect.railway.result import Result, Success, Failure
from lndconnect.railway.failure import ErrorKind, FailureDescription
from lndconnect.railway.assertions import ResultAssertions

__all__ = [
    "Result",
    "Success",
    "Failure",
    "ErrorKind",
    "FailureDescription",
    "ResultAssertions",
]
