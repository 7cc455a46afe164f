"""
lndconnect — parser and validator for lndconnect:// connect strings.

Turns a single-line connect string into a validated ConnectionConfig
(host, port, optional pinned TLS certificate, macaroon) ready for a gRPC
client, or into exactly one ErrorKind explaining why it was rejected.

Built on Railway-Oriented Programming (ROP) for explicit, composable
error handling.
"""

__version__ = "0.1.0"
