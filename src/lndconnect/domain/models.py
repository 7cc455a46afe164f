"""
Domain models — immutable value objects for parsed connect strings.

ConnectUri is the structural view of the URI (what the generic URI split
found); ConnectionConfig is the validated descriptor handed to the TLS/RPC
client. A ConnectionConfig only ever exists for a connect string that passed
every validation step, so its fields need no further checking.

Both models are frozen dataclasses (immutable) following functional principles.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from lndconnect.codec import decode_base64url

SCHEME = "lndconnect"


@dataclass(frozen=True, slots=True)
class ConnectUri:
    """
    Structural components of a URI, before any lndconnect validation.

    `host` is None when the authority is not a server authority (empty or
    not a hostname / IP literal). `port` is None when no usable port was
    given. `query` is None when the URI has no `?` at all, and "" when it
    has one with nothing after it.
    """

    scheme: str
    host: str | None = None
    port: int | None = None
    query: str | None = None


@dataclass(frozen=True, slots=True)
class ConnectionConfig:
    """
    Everything a client needs to reach an lnd node.

    `cert` and `macaroon` are kept in their base64url form, exactly as they
    appeared in the connect string; both were decoded successfully during
    validation. They are excluded from repr so configs can be logged.
    """

    host: str
    port: int
    macaroon: str = field(repr=False)
    cert: str | None = field(default=None, repr=False)

    @property
    def target(self) -> str:
        """`host:port` as expected by gRPC channel constructors."""
        return f"{self.host}:{self.port}"

    @property
    def has_cert(self) -> bool:
        return self.cert is not None

    def cert_bytes(self) -> bytes | None:
        """The DER certificate bytes, or None when no certificate was supplied."""
        if self.cert is None:
            return None
        return decode_base64url(self.cert)

    def macaroon_bytes(self) -> bytes:
        return decode_base64url(self.macaroon)

    def macaroon_hex(self) -> str:
        """Hex form of the macaroon, as lnd expects in the `macaroon` gRPC metadata header."""
        return self.macaroon_bytes().hex()

    def to_connect_string(self) -> str:
        """
        Render the canonical connect string for this config.

        Parameters are emitted as cert (if any) then macaroon; parsing the
        result yields an equal ConnectionConfig.
        """
        params = []
        if self.cert is not None:
            params.append(f"cert={self.cert}")
        params.append(f"macaroon={self.macaroon}")
        return f"{SCHEME}://{self.host}:{self.port}?{'&'.join(params)}"
