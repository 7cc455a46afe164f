"""
Library-side logging defaults.

The parser and the TLS adapter are importable as a library, so they must not
print anything unless the embedding application opts in. They default to a
silent structlog logger; `lndconnect.main` passes real loggers after
`configure_structlog` has run.
"""

from __future__ import annotations

import logging

import structlog


def silent_logger() -> structlog.typing.FilteringBoundLogger:
    """A structlog logger that drops every event."""
    return structlog.wrap_logger(
        structlog.ReturnLogger(),
        wrapper_class=structlog.make_filtering_bound_logger(logging.CRITICAL),
    )
