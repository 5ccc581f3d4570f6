"""Endpoint Schemas — pydantic models for registry inspection responses.

Invariants:
    - Responses carry labels and counts, never handles
    - EndpointDetail extends EndpointSummary with connection labels

Design Decisions:
    - from_snapshot() classmethods: core snapshots stay pydantic-free
"""

from pydantic import BaseModel, Field

from netbridge.core.registry_snapshot import EndpointSnapshot


class EndpointSummary(BaseModel):
    """One registered endpoint."""
    key: str
    server: str | None
    server_alive: bool
    connection_count: int = Field(ge=0)
    rooms: dict[str, int] = Field(default_factory=dict)

    @classmethod
    def from_snapshot(cls, snap: EndpointSnapshot) -> "EndpointSummary":
        return cls(
            key=snap.key,
            server=snap.server_label,
            server_alive=snap.server_alive,
            connection_count=snap.connection_count,
            rooms=dict(snap.rooms),
        )


class EndpointDetail(EndpointSummary):
    """Endpoint summary plus the labels of attached connections."""
    connections: list[str] = Field(default_factory=list)

    @classmethod
    def from_snapshot(cls, snap: EndpointSnapshot) -> "EndpointDetail":
        return cls(
            key=snap.key,
            server=snap.server_label,
            server_alive=snap.server_alive,
            connection_count=snap.connection_count,
            rooms=dict(snap.rooms),
            connections=list(snap.connection_labels),
        )


class ConnectionListResponse(BaseModel):
    """Result of a list_connections query."""
    key: str
    room: str | None = None
    connections: list[str]
    count: int = Field(ge=0)
