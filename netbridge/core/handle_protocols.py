"""Handle Protocols — structural contracts for the objects the registry tracks.

Invariants:
    - The registry never calls methods on handles; it only compares identity
      and reads ConnectionLike.url
    - Handles are owned by the caller, never by the registry

Design Decisions:
    - Protocol over ABC: simulated servers and sockets come from test doubles
      and third-party mocks with no shared base class
"""

from typing import Protocol


class ServerLike(Protocol):
    """Structural contract for a simulated server handle.

    Any object qualifies; the registry only stores it and hands it back to
    connections that attach to the same endpoint.
    """


class ConnectionLike(Protocol):
    """Structural contract for a simulated client connection.

    `url` is the address the connection was opened against. Room operations
    use it to find the connection's endpoint.
    """
    url: str
