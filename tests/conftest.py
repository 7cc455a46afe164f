"""
Shared test fixtures for the lndconnect test suite.

Provides a freshly generated self-signed node certificate (the shape lnd
autogenerates for its gRPC listener) and a stand-in macaroon, both in raw
and base64url form.
"""

from __future__ import annotations

import ipaddress
from datetime import UTC, datetime, timedelta

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.serialization import Encoding
from cryptography.x509.oid import NameOID

from lndconnect.codec import encode_base64url

MACAROON_BYTES = bytes.fromhex("0201036c6e6402f801030a1022c1a4b0a1b2c3d4e5f60718293a4b5c")


@pytest.fixture(scope="session")
def node_certificate() -> x509.Certificate:
    """Self-signed EC certificate for localhost / 10.0.0.1, like lnd's tls.cert."""
    key = ec.generate_private_key(ec.SECP256R1())
    name = x509.Name([
        x509.NameAttribute(NameOID.ORGANIZATION_NAME, "lnd autogenerated cert"),
        x509.NameAttribute(NameOID.COMMON_NAME, "localhost"),
    ])
    now = datetime.now(UTC)
    return (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - timedelta(days=1))
        .not_valid_after(now + timedelta(days=365))
        .add_extension(x509.BasicConstraints(ca=True, path_length=None), critical=True)
        .add_extension(
            x509.SubjectAlternativeName([
                x509.DNSName("localhost"),
                x509.IPAddress(ipaddress.ip_address("10.0.0.1")),
            ]),
            critical=False,
        )
        .sign(key, hashes.SHA256())
    )


@pytest.fixture(scope="session")
def cert_der(node_certificate: x509.Certificate) -> bytes:
    return node_certificate.public_bytes(Encoding.DER)


@pytest.fixture(scope="session")
def cert_pem(node_certificate: x509.Certificate) -> bytes:
    return node_certificate.public_bytes(Encoding.PEM)


@pytest.fixture(scope="session")
def cert_b64(cert_der: bytes) -> str:
    """The certificate as it appears in a connect string."""
    return encode_base64url(cert_der)


@pytest.fixture(scope="session")
def macaroon_bytes() -> bytes:
    return MACAROON_BYTES


@pytest.fixture(scope="session")
def macaroon_b64() -> str:
    """The macaroon as it appears in a connect string."""
    return encode_base64url(MACAROON_BYTES)
