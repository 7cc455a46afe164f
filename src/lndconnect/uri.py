"""
URI collaborator — generic structural split of a URI and its query string.

Nothing here knows about lndconnect: it splits any `scheme://authority?query`
URI into the components the parser validates, and rejects text that is not
a syntactically valid URI at all.

Two kinds of outcome are deliberately kept apart:
  - UriSyntaxError: the text is not a URI (illegal characters, broken `%`
    escapes, two fragments, unbalanced IPv6 brackets).
  - host/port of None: the text is a URI, but its authority is not a usable
    `host:port` server authority. Callers decide what that means.
"""

from __future__ import annotations

import re
import unicodedata
from urllib.parse import unquote, urlsplit

from lndconnect.domain.models import ConnectUri

# RFC 3986 unreserved + reserved characters, "%" for escapes, and non-ASCII
# characters above the C1 control block.
_URI_CHARS = re.compile(r"[A-Za-z0-9\-._~:/?#\[\]@!$&'()*+,;=%\u00a0-\U0010ffff]*")
_SPACE_CATEGORIES = frozenset({"Zs", "Zl", "Zp"})
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")
_SCHEME = re.compile(r"[A-Za-z][A-Za-z0-9+.\-]*:")

_LABEL = r"[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?"
_HOSTNAME = re.compile(rf"{_LABEL}(?:\.{_LABEL})*\.?")
_IPV6_LITERAL = re.compile(r"\[[0-9A-Fa-f:.]+\]")
_IPV4 = re.compile(r"([0-9]{1,3})\.([0-9]{1,3})\.([0-9]{1,3})\.([0-9]{1,3})")
_PORT = re.compile(r"[0-9]+")

MAX_PORT = 65535


class UriSyntaxError(ValueError):
    """Raised when text is not a syntactically valid URI."""


def split_uri(text: str) -> ConnectUri:
    """
    Split a URI into scheme, server host, server port, and decoded query.

    The host is returned exactly as written (no case folding, IPv6 brackets
    kept). The query is percent-decoded; it is None when the URI has no `?`.
    Raises UriSyntaxError if the text is not a valid URI.
    """
    if not _URI_CHARS.fullmatch(text) or _has_space_separator(text):
        raise UriSyntaxError("URI contains illegal characters")
    if _BAD_ESCAPE.search(text):
        raise UriSyntaxError("URI contains a malformed percent escape")
    if text.count("#") > 1:
        raise UriSyntaxError("URI contains more than one fragment")
    if not _SCHEME.match(text):
        raise UriSyntaxError("URI has no scheme")

    try:
        parts = urlsplit(text)
    except ValueError as e:
        raise UriSyntaxError(str(e)) from e

    host, port = _server_authority(parts.netloc)
    has_query = "?" in text.partition("#")[0]

    return ConnectUri(
        scheme=parts.scheme,
        host=host,
        port=port,
        query=unquote(parts.query) if has_query else None,
    )


def _has_space_separator(text: str) -> bool:
    return any(unicodedata.category(char) in _SPACE_CATEGORIES for char in text if char >= "\u00a0")


def _numeric_host_is_ipv4(host: str) -> bool:
    """
    A dotted host whose last label starts with a digit must be an IPv4
    address; `1.2.3` and `10.0.0.256` are neither hostnames nor addresses.
    """
    labels = host.rstrip(".").split(".")
    if len(labels) == 1 or not labels[-1][0].isdigit():
        return True
    match = _IPV4.fullmatch(host)
    return match is not None and all(int(octet) <= 255 for octet in match.groups())


def _server_authority(netloc: str) -> tuple[str | None, int | None]:
    """
    Interpret an authority as `[userinfo@]host[:port]`.

    Returns (None, None) when the authority is not a server authority: empty
    host, a host that is neither an ASCII hostname nor an IP literal, or a port that
    is not a number in [0, 65535]. A valid host without a port yields (host, None).
    """
    hostport = netloc.rpartition("@")[2]

    if hostport.startswith("["):
        close = hostport.find("]")
        if close == -1:
            raise UriSyntaxError("Unbalanced IPv6 literal in authority")
        host, rest = hostport[: close + 1], hostport[close + 1 :]
        if rest and not rest.startswith(":"):
            return None, None
        port_text = rest[1:] if rest else None
        if not _IPV6_LITERAL.fullmatch(host):
            return None, None
    else:
        host, sep, port_text = hostport.rpartition(":")
        if not sep:
            host, port_text = hostport, None
        if not _HOSTNAME.fullmatch(host) or not _numeric_host_is_ipv4(host):
            return None, None

    if not port_text:
        return host, None
    if not _PORT.fullmatch(port_text) or int(port_text) > MAX_PORT:
        return None, None
    return host, int(port_text)


def parse_query(query: str) -> dict[str, str]:
    """
    Split a query string into key/value pairs.

    Pairs are separated by `&` and split on the first `=`. Pairs with no `=`
    or an empty value are dropped. When a key repeats, the last value wins.
    """
    params: dict[str, str] = {}
    for pair in query.split("&"):
        key, sep, value = pair.partition("=")
        if not sep or not value:
            continue
        params[key] = value
    return params
