"""
Connect-string parser — the core validation railway.

Domain layer: PURE validation logic. The only collaborators (base64url
decoding, URI splitting, TLS context construction) are either pure functions
or injected via the TlsContextFactory port.

The steps are connected via ensure/flat_map, forming a railway:

  presence
    → scheme is lndconnect://
      → structural URI split
        → explicit port
          → query present
            → cert decodes and yields a TLS context (if given)
              → macaroon present and decodes
                → ConnectionConfig

Each step returns Result[T]. The first failure short-circuits the rest and
decides the reported ErrorKind, so the step order IS the error precedence.
"""

from __future__ import annotations

import ssl
from typing import Any

from lndconnect.adapters.tls import SslContextFactory
from lndconnect.codec import decode_base64url
from lndconnect.domain.models import SCHEME, ConnectionConfig, ConnectUri
from lndconnect.domain.ports import TlsContextFactory
from lndconnect.logs import silent_logger
from lndconnect.railway import ErrorKind, FailureDescription
from lndconnect.railway.result import Result
from lndconnect.uri import parse_query, split_uri

SCHEME_PREFIX = f"{SCHEME}://"
CERT_PARAM = "cert"
MACAROON_PARAM = "macaroon"


def _has_scheme(connect_string: str) -> bool:
    """Case-insensitive match of the `lndconnect://` prefix only."""
    return connect_string[: len(SCHEME_PREFIX)].lower() == SCHEME_PREFIX


def _split(connect_string: str) -> Result[ConnectUri]:
    return Result.from_computation(
        lambda: split_uri(connect_string),
        ErrorKind.INVALID_CONNECT_STRING,
        "URI could not be parsed",
    )


def _check_macaroon(params: dict[str, str]) -> Result[dict[str, str]]:
    """The macaroon is mandatory and must decode; its bytes are not kept."""
    macaroon = params.get(MACAROON_PARAM)
    if macaroon is None:
        return Result.failure(ErrorKind.NO_MACAROON, "Connect string does not include a macaroon")
    return Result.from_computation(
        lambda: decode_base64url(macaroon),
        ErrorKind.INVALID_MACAROON,
        "Macaroon decoding failed",
    ).map(lambda _: params)


def _as_invalid_certificate(error: FailureDescription) -> FailureDescription:
    return FailureDescription(
        kind=ErrorKind.INVALID_CERTIFICATE,
        message=f"Certificate creation failed: {error.message}",
        exception=error.exception,
    )


class LndConnectStringParser:
    """
    Parse and validate lndconnect connect strings.

    The parser holds only its collaborators; every call to parse() is an
    independent computation over its own input, so one instance may be
    shared across threads.
    """

    def __init__(
        self,
        tls_context_factory: TlsContextFactory | None = None,
        logger: Any = None,
    ) -> None:
        self._tls_context_factory = tls_context_factory or SslContextFactory()
        self._log = logger if logger is not None else silent_logger()

    def parse(self, connect_string: str | None) -> Result[ConnectionConfig]:
        """
        Validate a connect string and build its ConnectionConfig.

        Returns Result[ConnectionConfig] on success, or a Failure carrying
        exactly one ErrorKind. Never raises for bad input.
        """
        return (
            Result.from_optional(connect_string, "Connect string is missing")
            .ensure(
                _has_scheme,
                ErrorKind.INVALID_CONNECT_STRING,
                f"Connect string does not start with {SCHEME_PREFIX}",
            )
            .flat_map(_split)
            .ensure(
                lambda uri: uri.host is not None and uri.port is not None,
                ErrorKind.INVALID_HOST_OR_PORT,
                "Connect URI has no valid host and port",
            )
            .ensure(
                lambda uri: uri.query is not None,
                ErrorKind.INVALID_CONNECT_STRING,
                "Connect URI has no parameters",
            )
            .flat_map(self._validate_params)
            .peek(self._log_parsed)
            .peek_failure(self._log_rejected)
        )

    def _validate_params(self, uri: ConnectUri) -> Result[ConnectionConfig]:
        return (
            Result.success(parse_query(uri.query or ""))
            .flat_map(self._check_certificate)
            .flat_map(_check_macaroon)
            .map(
                lambda params: ConnectionConfig(
                    host=uri.host,  # type: ignore[arg-type]
                    port=uri.port,  # type: ignore[arg-type]
                    macaroon=params[MACAROON_PARAM],
                    cert=params.get(CERT_PARAM),
                )
            )
        )

    def _check_certificate(self, params: dict[str, str]) -> Result[dict[str, str]]:
        """
        The certificate is optional: absent is valid (e.g. a node behind a
        publicly trusted certificate). Present means it must decode and the
        TLS factory must accept it.
        """
        cert = params.get(CERT_PARAM)
        if cert is None:
            return Result.success(params)
        return (
            Result.from_computation(
                lambda: decode_base64url(cert),
                ErrorKind.INVALID_CERTIFICATE,
                "Certificate decoding failed",
            )
            .flat_map(self._build_tls_context)
            .map(lambda _: params)
        )

    def _build_tls_context(self, certificate: bytes) -> Result[ssl.SSLContext]:
        """Run the opaque TLS factory; any failure or exception is INVALID_CERTIFICATE."""
        return (
            Result.from_computation(
                lambda: self._tls_context_factory.create(certificate),
                ErrorKind.INVALID_CERTIFICATE,
                "TLS context factory raised",
            )
            .flat_map(lambda outcome: outcome)
            .map_failure(_as_invalid_certificate)
        )

    def _log_parsed(self, config: ConnectionConfig) -> None:
        self._log.debug(
            "connect_string.parsed",
            host=config.host,
            port=config.port,
            has_cert=config.has_cert,
        )

    def _log_rejected(self, error: FailureDescription) -> None:
        self._log.debug(
            "connect_string.rejected",
            kind=error.kind.value,
            reason=error.message,
        )


def parse_connect_string(
    connect_string: str | None,
    tls_context_factory: TlsContextFactory | None = None,
) -> Result[ConnectionConfig]:
    """Parse a connect string with a fresh parser (default: SslContextFactory)."""
    return LndConnectStringParser(tls_context_factory).parse(connect_string)
