"""
Ports — Protocol-based interfaces for the parser's external collaborators.

These define WHAT the parser needs without specifying HOW it's done.
Following hexagonal architecture:

  Domain ← Ports (protocols) ← Adapters (implementations)

Each port is a Protocol (structural typing) so adapters and test fakes
satisfy the contract simply by implementing the method; no inheritance needed.
"""

from __future__ import annotations

import ssl
from typing import Protocol, runtime_checkable

from lndconnect.railway.result import Result


@runtime_checkable
class TlsContextFactory(Protocol):
    """
    Port: build a client TLS context that trusts the given certificate.

    The parser treats this as an opaque, fallible operation: it only asks
    whether a context could be built, never why not. Any Failure (or any
    exception escaping an implementation) means the certificate is invalid.
    """

    def create(self, certificate: bytes) -> Result[ssl.SSLContext]: ...
