"""
Failure description — structured error information for the failure track.

Every failed parse reports exactly one ErrorKind. The kinds form a closed set:
callers branch on them to decide user-facing presentation, so no collaborator
error type (binascii, cryptography, ssl) ever leaks past this module's types.

The numeric legacy codes are kept for clients that stored or transmitted
errors as integers before the kinds had names.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum, unique
from typing import Optional


@unique
class ErrorKind(Enum):
    """
    The complete taxonomy of connect-string failures.

    Listed in legacy code order; precedence between them is decided by the
    order of the parser's validation steps, not by this enum.
    """

    INVALID_CONNECT_STRING = "INVALID_CONNECT_STRING"
    """Missing input, wrong scheme, malformed URI, or no query component."""

    NO_MACAROON = "NO_MACAROON"
    """The query carries no macaroon value."""

    INVALID_CERTIFICATE = "INVALID_CERTIFICATE"
    """The cert value is not base64url, or no TLS context can be built from it."""

    INVALID_MACAROON = "INVALID_MACAROON"
    """The macaroon value is not base64url."""

    INVALID_HOST_OR_PORT = "INVALID_HOST_OR_PORT"
    """The authority has no explicit, usable server port."""

    @property
    def code(self) -> int:
        """Legacy integer code (0-4)."""
        return _LEGACY_CODES[self]


_LEGACY_CODES: dict[ErrorKind, int] = {kind: index for index, kind in enumerate(ErrorKind)}


@dataclass(frozen=True, slots=True)
class FailureDescription:
    """
    Immutable failure descriptor carrying kind, message, optional exception, and timestamp.

    >>> desc = FailureDescription(ErrorKind.NO_MACAROON, "Connect string has no macaroon")
    >>> desc.kind
    <ErrorKind.NO_MACAROON: 'NO_MACAROON'>
    >>> desc.kind.code
    1
    """

    kind: ErrorKind
    message: str
    exception: Optional[BaseException] = field(default=None, repr=False)
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))
