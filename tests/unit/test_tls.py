"""
Unit tests for the ssl-backed TLS context adapter.

Uses a real self-signed certificate generated in conftest.py.

Test categories:
  - Happy path: DER and PEM certificates → pinned client SSLContext
  - Error path: non-certificate bytes → Result.failure(INVALID_CERTIFICATE)
"""

from __future__ import annotations

import ssl
from unittest.mock import MagicMock

import pytest
import structlog

from lndconnect.adapters.tls import SslContextFactory, load_certificate
from lndconnect.domain.ports import TlsContextFactory
from lndconnect.railway import ErrorKind, ResultAssertions


@pytest.fixture()
def factory() -> SslContextFactory:
    return SslContextFactory()


class TestLoadCertificate:
    def test_loads_der(self, cert_der: bytes) -> None:
        cert = load_certificate(cert_der)
        assert "localhost" in cert.subject.rfc4514_string()

    def test_falls_back_to_pem(self, cert_pem: bytes, cert_der: bytes) -> None:
        """
        GIVEN the PEM form of the node certificate
        WHEN loaded
        THEN it is the same certificate as the DER form.
        """
        assert load_certificate(cert_pem) == load_certificate(cert_der)

    def test_rejects_garbage(self) -> None:
        with pytest.raises(ValueError):
            load_certificate(b"foo")


class TestSslContextFactory:
    def test_satisfies_port(self, factory: SslContextFactory) -> None:
        assert isinstance(factory, TlsContextFactory)

    def test_builds_pinned_client_context(self, factory: SslContextFactory, cert_der: bytes) -> None:
        """
        GIVEN a valid DER certificate
        WHEN create() is called
        THEN the context requires verification and trusts exactly that certificate.
        """
        context = ResultAssertions.assert_success(factory.create(cert_der))
        assert isinstance(context, ssl.SSLContext)
        assert context.verify_mode == ssl.CERT_REQUIRED
        assert context.check_hostname is True
        assert context.minimum_version == ssl.TLSVersion.TLSv1_2
        assert len(context.get_ca_certs()) == 1

    def test_hostname_check_can_be_disabled(self, cert_der: bytes) -> None:
        context = ResultAssertions.assert_success(SslContextFactory(check_hostname=False).create(cert_der))
        assert context.check_hostname is False
        assert context.verify_mode == ssl.CERT_REQUIRED

    def test_accepts_pem(self, factory: SslContextFactory, cert_pem: bytes) -> None:
        ResultAssertions.assert_success(factory.create(cert_pem))

    @pytest.mark.parametrize("payload", [b"foo", b"", b"\x30\x82\x01\x00"])
    def test_non_certificate_is_invalid_certificate(self, factory: SslContextFactory, payload: bytes) -> None:
        """
        GIVEN bytes that are not an X.509 certificate
        WHEN create() is called
        THEN the result is a failure of kind INVALID_CERTIFICATE carrying the cause.
        """
        error = ResultAssertions.assert_failure(factory.create(payload), ErrorKind.INVALID_CERTIFICATE)
        assert error.exception is not None


class TestTlsLogging:
    def test_injected_logger_sees_context_creation(self, cert_der: bytes) -> None:
        logger = MagicMock()
        ResultAssertions.assert_success(SslContextFactory(logger=logger).create(cert_der))

        logger.debug.assert_called_once()
        assert logger.debug.call_args.args == ("tls.context_created",)
        assert logger.debug.call_args.kwargs["check_hostname"] is True

    def test_default_logger_prints_nothing(self, capsys: pytest.CaptureFixture[str], cert_der: bytes) -> None:
        structlog.reset_defaults()
        ResultAssertions.assert_success(SslContextFactory().create(cert_der))

        assert capsys.readouterr().out == ""
