"""
TLS adapter — build a pinned client SSLContext from raw certificate bytes.

Adapter layer — implements the TlsContextFactory port using:
  - cryptography (PyCA): load the X.509 certificate (DER, falling back to PEM)
  - ssl: a client context whose only trust anchor is that certificate

lnd ships a self-signed certificate, so the connect string pins it: the
resulting context trusts exactly this certificate and nothing from the
system store. Trust-chain evaluation beyond that is left to the TLS
handshake itself.
"""

from __future__ import annotations

import ssl
from typing import Any

from cryptography import x509
from cryptography.hazmat.primitives.serialization import Encoding

from lndconnect.logs import silent_logger
from lndconnect.railway import ErrorKind
from lndconnect.railway.result import Result


def load_certificate(certificate: bytes) -> x509.Certificate:
    """
    Load an X.509 certificate from DER bytes, or PEM bytes as a fallback.

    Connect strings carry DER (the PEM body without armor); PEM is accepted
    for certificates read straight from an lnd `tls.cert` file.
    """
    try:
        return x509.load_der_x509_certificate(certificate)
    except ValueError:
        return x509.load_pem_x509_certificate(certificate)


class SslContextFactory:
    """
    Build client TLS contexts pinned to a single certificate.

    Implements the TlsContextFactory port.
    All exceptions are caught at this adapter boundary via Result.from_computation().
    """

    def __init__(self, check_hostname: bool = True, logger: Any = None) -> None:
        self._check_hostname = check_hostname
        self._log = logger if logger is not None else silent_logger()

    def create(self, certificate: bytes) -> Result[ssl.SSLContext]:
        """
        Build an SSLContext trusting only the given certificate.

        Returns Result.failure(INVALID_CERTIFICATE, ...) when the bytes are
        not a certificate or OpenSSL refuses them as a trust anchor.
        """
        return Result.from_computation(
            lambda: self._do_create(certificate),
            ErrorKind.INVALID_CERTIFICATE,
            "Failed to build TLS context from certificate",
        )

    def _do_create(self, certificate: bytes) -> ssl.SSLContext:
        cert = load_certificate(certificate)
        pem = cert.public_bytes(Encoding.PEM).decode("ascii")

        context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
        context.minimum_version = ssl.TLSVersion.TLSv1_2
        context.check_hostname = self._check_hostname
        context.verify_mode = ssl.CERT_REQUIRED
        context.load_verify_locations(cadata=pem)

        self._log.debug(
            "tls.context_created",
            subject=cert.subject.rfc4514_string(),
            check_hostname=self._check_hostname,
        )
        return context
