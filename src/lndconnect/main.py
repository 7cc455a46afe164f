"""
Application entry point — wires dependencies and exposes the CLI.

Composition root: creates the concrete TLS adapter, injects it into the
parser, and hands the parser to the typer commands.

This is the ONLY place where concrete adapters are instantiated.
Everything else depends on the TlsContextFactory port.

Responsibilities:
  1. Configure structlog
  2. Load and validate configuration from environment
  3. Create the parser with its TLS adapter
  4. Render parse outcomes as JSON for the `parse` and `render` commands
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

import structlog
import typer
from cryptography.hazmat.primitives.serialization import Encoding
from pydantic import ValidationError

from lndconnect.adapters.tls import SslContextFactory, load_certificate
from lndconnect.codec import encode_base64url
from lndconnect.config import AppSettings
from lndconnect.domain.models import ConnectionConfig
from lndconnect.parser import LndConnectStringParser
from lndconnect.railway import FailureDescription
from lndconnect.railway.result import Failure, Success

app = typer.Typer(
    help="Parse and build lndconnect:// connect strings.",
    no_args_is_help=True,
    add_completion=False,
)


def configure_structlog(log_level: str = "INFO") -> None:
    """
    Configure structlog for human-readable console logging on stderr.

    stdout is reserved for command output (JSON or a connect string).
    """
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level.upper(), logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def create_parser(settings: AppSettings) -> LndConnectStringParser:
    """Instantiate the parser with the ssl-backed TLS adapter, both logging through structlog."""
    log = structlog.get_logger()
    return LndConnectStringParser(
        tls_context_factory=SslContextFactory(check_hostname=settings.tls.check_hostname, logger=log),
        logger=log,
    )


def describe_config(config: ConnectionConfig, reveal_macaroon: bool = False) -> dict[str, Any]:
    """JSON-ready summary of a parsed config; the macaroon only on request."""
    summary: dict[str, Any] = {
        "host": config.host,
        "port": config.port,
        "target": config.target,
        "has_cert": config.has_cert,
    }
    if reveal_macaroon:
        summary["macaroon_hex"] = config.macaroon_hex()
    return summary


def describe_failure(error: FailureDescription) -> dict[str, Any]:
    return {
        "error": error.kind.value,
        "code": error.kind.code,
        "message": error.message,
    }


def _load_settings() -> AppSettings:
    try:
        return AppSettings()
    except ValidationError as e:
        typer.echo(f"FATAL: Configuration error — {e}", err=True)
        raise typer.Exit(code=2) from e


@app.command(name="parse", help="Validate a connect string and print its connection summary.")
def parse_command(
    connect_string: Optional[str] = typer.Argument(
        None, help="lndconnect:// URI (defaults to LNDCONNECT_CONNECT_STRING)"
    ),
    reveal_macaroon: bool = typer.Option(
        False, "--reveal-macaroon", help="Include the macaroon as hex in the output"
    ),
) -> None:
    settings = _load_settings()
    configure_structlog(settings.log_level)
    if connect_string is None and settings.connect_string is not None:
        connect_string = settings.connect_string.get_secret_value()

    result = create_parser(settings).parse(connect_string)

    match result:
        case Success(config):
            typer.echo(json.dumps(describe_config(config, reveal_macaroon), indent=2))
        case Failure(error):
            typer.echo(json.dumps(describe_failure(error), indent=2), err=True)
            raise typer.Exit(code=1)


@app.command(name="render", help="Build a connect string from a macaroon file and an optional certificate.")
def render_command(
    host: str = typer.Argument(..., help="Node host name or IP literal"),
    port: int = typer.Argument(..., min=0, max=65535, help="Node gRPC port"),
    macaroon_file: Path = typer.Option(
        ..., "--macaroon-file", exists=True, dir_okay=False, readable=True, help="Binary macaroon file"
    ),
    cert_file: Optional[Path] = typer.Option(
        None, "--cert-file", exists=True, dir_okay=False, readable=True, help="PEM or DER tls.cert"
    ),
) -> None:
    settings = _load_settings()
    configure_structlog(settings.log_level)

    cert = None
    if cert_file is not None:
        try:
            cert = encode_base64url(load_certificate(cert_file.read_bytes()).public_bytes(Encoding.DER))
        except ValueError as e:
            typer.echo(f"Not a certificate: {cert_file}", err=True)
            raise typer.Exit(code=1) from e

    candidate = ConnectionConfig(
        host=host,
        port=port,
        macaroon=encode_base64url(macaroon_file.read_bytes()),
        cert=cert,
    )

    # Round-trip through the parser so only strings that parse are emitted.
    result = create_parser(settings).parse(candidate.to_connect_string())
    match result:
        case Success(config):
            typer.echo(config.to_connect_string())
        case Failure(error):
            typer.echo(json.dumps(describe_failure(error), indent=2), err=True)
            raise typer.Exit(code=1)


def main() -> None:
    """Console-script entry point."""
    app(prog_name="lndconnect")


if __name__ == "__main__":
    main()
