"""Connection Group — per-endpoint record of server, connections and rooms.

Invariants:
    - server_ref is set once at creation and never reassigned
    - A connection appears at most once in connection_refs (identity)
    - Room lists may hold duplicates; add_room_member never deduplicates
    - All read accessors return fresh lists, never the internal storage

Design Decisions:
    - Dataclass mutated only through its methods: the registry decides *whether*
      to mutate, the group only knows *how*
    - Room lists created lazily on first join; leaving never creates a room
"""

from dataclasses import dataclass, field
from typing import Any

from netbridge.core.domain_types import EndpointKey, RoomName
from netbridge.core.handle_refs import HandleRef, live_handles


@dataclass
class ConnectionGroup:
    """Server, attached connections and room memberships for one endpoint."""

    key: EndpointKey
    server_ref: HandleRef

    # Attached connections, in attach order
    connection_refs: list[HandleRef] = field(default_factory=list)

    # Room name → members, in join order (duplicates allowed)
    room_memberships: dict[RoomName, list[HandleRef]] = field(default_factory=dict)

    weak_handles: bool = True

    @classmethod
    def create(
        cls, key: EndpointKey, server: Any, weak_handles: bool = True,
    ) -> "ConnectionGroup":
        return cls(
            key=key,
            server_ref=HandleRef(server, weak=weak_handles),
            weak_handles=weak_handles,
        )

    # ─── Server ──────────────────────────────────────────────────

    @property
    def server(self) -> Any:
        """The registered server, or None if it was collected."""
        return self.server_ref.get()

    @property
    def has_server(self) -> bool:
        return self.server_ref.alive

    # ─── Connections ─────────────────────────────────────────────

    @property
    def connections(self) -> list[Any]:
        return live_handles(self.connection_refs)

    @property
    def connection_count(self) -> int:
        return len(self.connections)

    def has_connection(self, connection: Any) -> bool:
        return any(ref.refers_to(connection) for ref in self.connection_refs)

    def add_connection(self, connection: Any) -> None:
        self.connection_refs.append(HandleRef(connection, weak=self.weak_handles))

    def remove_connection(self, connection: Any) -> bool:
        """Remove by identity, keeping the order of the rest. True if removed."""
        kept = [ref for ref in self.connection_refs if not ref.refers_to(connection)]
        removed = len(kept) != len(self.connection_refs)
        self.connection_refs = kept
        return removed

    # ─── Rooms ───────────────────────────────────────────────────

    @property
    def room_names(self) -> list[RoomName]:
        return list(self.room_memberships)

    def room_members(self, room: RoomName) -> list[Any]:
        """Members of a room in join order; empty if the room was never joined."""
        return live_handles(self.room_memberships.get(room) or [])

    def add_room_member(self, connection: Any, room: RoomName) -> None:
        members = self.room_memberships.setdefault(room, [])
        members.append(HandleRef(connection, weak=self.weak_handles))

    def remove_room_member(self, connection: Any, room: RoomName) -> int:
        """Drop every occurrence of connection from room. Returns how many."""
        members = self.room_memberships.get(room)
        if not members:
            return 0
        kept = [ref for ref in members if not ref.refers_to(connection)]
        self.room_memberships[room] = kept
        return len(members) - len(kept)

    def rooms_of(self, connection: Any) -> list[RoomName]:
        return [
            room for room, members in self.room_memberships.items()
            if any(ref.refers_to(connection) for ref in members)
        ]

    def purge_memberships(self, connection: Any) -> int:
        """Remove connection from every room. Returns total occurrences removed."""
        return sum(
            self.remove_room_member(connection, room)
            for room in self.room_names
        )
