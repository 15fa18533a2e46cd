"""Server address canonicalization."""

from __future__ import annotations

DEFAULT_PORT = 27017


def canonicalize(addr: str) -> str:
    """Return the canonical ``host:port`` form of *addr*.

    Hosts are lower-cased and the default port is appended when none is
    given. Unix socket paths and bare IPv6 literals are only lower-cased.
    """
    if not addr:
        return addr
    addr = addr.lower()
    if addr.endswith('.sock'):
        return addr
    if addr.startswith('['):
        return addr if ']:' in addr else f"{addr}:{DEFAULT_PORT}"
    if ':' in addr:
        # host:port, or a bare IPv6 literal such as ``::1``
        return addr
    return f"{addr}:{DEFAULT_PORT}"
