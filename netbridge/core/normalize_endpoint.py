"""Endpoint Normalization — canonical keys for endpoint addresses.

Invariants:
    - Output is the origin (scheme://host[:port]) when the address has one,
      otherwise the path with any query part trimmed
    - Scheme and host are lower-cased; default ports are dropped
    - Never raises for input urlsplit accepts; an unparseable port degrades
      to the raw host portion of the netloc

Design Decisions:
    - urllib.parse.urlsplit as the URL parser: no third-party URL dependency
    - Path fallback covers namespace-style addresses ("/chat") where several
      logical endpoints share one origin
"""

from urllib.parse import SplitResult, urlsplit

from netbridge.core.domain_types import EndpointKey


DEFAULT_PORTS: dict[str, int] = {
    "http": 80,
    "ws": 80,
    "https": 443,
    "wss": 443,
    "ftp": 21,
    "gopher": 70,
}

# Schemes that never carry an origin
_OPAQUE_ORIGIN_SCHEMES = frozenset({"file"})


def trim_query(address: str) -> str:
    """Drop everything from the first '?' onwards."""
    index = address.find("?")
    return address[:index] if index >= 0 else address


def extract_origin(parts: SplitResult) -> str:
    """Return "scheme://host[:port]" or "" when the URL has no origin."""
    scheme = parts.scheme.lower()
    if not scheme or scheme in _OPAQUE_ORIGIN_SCHEMES or not parts.hostname:
        return ""
    host = parts.hostname
    if ":" in host:
        host = f"[{host}]"
    try:
        port = parts.port
    except ValueError:
        # "ws://host:abc": keep what the caller wrote
        raw_host = parts.netloc.rpartition("@")[2].lower()
        return f"{scheme}://{raw_host}"
    if port is not None and DEFAULT_PORTS.get(scheme) != port:
        return f"{scheme}://{host}:{port}"
    return f"{scheme}://{host}"


def normalize_endpoint(address: str) -> EndpointKey:
    """Normalize an address to its origin, or to its path when it has none.

    >>> normalize_endpoint("WS://Example.com:80/socket?token=1")
    'ws://example.com'
    >>> normalize_endpoint("/chat?room=lobby")
    '/chat'
    """
    trimmed = trim_query(address.strip())
    parts = urlsplit(trimmed)
    origin = extract_origin(parts)
    return EndpointKey(origin or parts.path)
