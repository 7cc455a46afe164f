"""
Base64url codec — strict decoding of the cert and macaroon query values.

The standard library decoder silently discards characters outside the
alphabet, which would let `!!!` or `+/` through. Decoding here validates the
text first, so every accepted value is exactly what an RFC 4648 §5 encoder
could have produced:

  - alphabet: A-Z a-z 0-9 - _
  - padding: optional; any trailing `=` run is tolerated, `=` elsewhere is not
  - length: after stripping padding, length % 4 must not be 1
"""

from __future__ import annotations

import base64
import binascii
import re

_ALPHABET = re.compile(r"[A-Za-z0-9_-]*")


class Base64UrlDecodeError(ValueError):
    """Raised when text is not valid base64url."""


def decode_base64url(text: str) -> bytes:
    """
    Decode base64url text into bytes.

    Raises Base64UrlDecodeError on characters outside the URL-safe alphabet,
    misplaced padding, or an impossible length. The empty string decodes to b"".
    """
    stripped = text.rstrip("=")
    if not _ALPHABET.fullmatch(stripped):
        raise Base64UrlDecodeError("Text contains characters outside the base64url alphabet")
    if len(stripped) % 4 == 1:
        raise Base64UrlDecodeError(f"Invalid base64url length: {len(stripped)}")

    padded = stripped + "=" * (-len(stripped) % 4)
    try:
        return base64.urlsafe_b64decode(padded)
    except binascii.Error as e:
        raise Base64UrlDecodeError(str(e)) from e


def encode_base64url(data: bytes) -> str:
    """Encode bytes as unpadded base64url text."""
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")
