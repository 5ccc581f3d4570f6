"""Registry Snapshot — immutable views of registry state for inspection.

Invariants:
    - Snapshots never hold handles, only labels and counts
    - Collected (weakly held) handles are excluded from counts and labels
    - Endpoint and room order follow registration and room creation order

Design Decisions:
    - Frozen dataclasses in core; the API converts them to pydantic models
"""

from dataclasses import dataclass, field
from typing import Any

from netbridge.core.connection_group import ConnectionGroup
from netbridge.core.domain_types import EndpointKey
from netbridge.core.endpoint_registry import EndpointRegistry


@dataclass(frozen=True)
class EndpointSnapshot:
    key: EndpointKey
    server_label: str | None
    server_alive: bool
    connection_count: int
    connection_labels: list[str] = field(default_factory=list)
    rooms: dict[str, int] = field(default_factory=dict)


def handle_label(handle: Any) -> str | None:
    """Human-readable identity: `name` attribute, else "<Type>@0x<id>"."""
    if handle is None:
        return None
    name = getattr(handle, "name", None)
    if isinstance(name, str) and name:
        return name
    return f"{type(handle).__name__}@{id(handle):#x}"


def snapshot_group(group: ConnectionGroup) -> EndpointSnapshot:
    connections = group.connections
    return EndpointSnapshot(
        key=group.key,
        server_label=handle_label(group.server),
        server_alive=group.has_server,
        connection_count=len(connections),
        connection_labels=[handle_label(c) for c in connections],
        rooms={room: len(group.room_members(room)) for room in group.room_names},
    )


def snapshot_registry(registry: EndpointRegistry) -> list[EndpointSnapshot]:
    return [snapshot_group(group) for group in registry.groups()]
