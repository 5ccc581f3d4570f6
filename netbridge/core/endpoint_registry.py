"""Endpoint Registry — who is reachable from whom, for simulated peers.

Invariants:
    - At most one ConnectionGroup per EndpointKey (first registrant wins)
    - A connection is attached to a group at most once
    - A connection joins a room only while attached to the same group
    - deregister_server() drops the group with all its connections and rooms
    - No operation raises on bad preconditions: None or [] is returned instead,
      and callers check the sentinel at each call site
    - list_connections() always returns a fresh list

Design Decisions:
    - Explicit registry objects instead of a module-level singleton: each test
      builds its own, the app reaches one through app.state
    - Rooms are resolved through connection.url, the address the connection
      recorded when it was opened
    - detach_connection() leaves room memberships in place unless
      purge_rooms_on_detach is set
    - Not thread-safe; single-threaded cooperative use only
"""

import logging

from netbridge.core.connection_group import ConnectionGroup
from netbridge.core.domain_types import EndpointKey, RoomName
from netbridge.core.handle_protocols import ConnectionLike, ServerLike
from netbridge.core.normalize_endpoint import normalize_endpoint

logger = logging.getLogger(__name__)


class EndpointRegistry:
    """Maps normalized endpoint keys to connection groups."""

    def __init__(
        self, weak_handles: bool = True, purge_rooms_on_detach: bool = False,
    ) -> None:
        self.weak_handles = weak_handles
        self.purge_rooms_on_detach = purge_rooms_on_detach
        self._groups: dict[EndpointKey, ConnectionGroup] = {}

    # ─── Lookup ──────────────────────────────────────────────────

    @staticmethod
    def normalize(address: str) -> EndpointKey:
        return normalize_endpoint(address)

    def lookup_group(self, address: str) -> ConnectionGroup | None:
        return self._groups.get(self.normalize(address))

    def lookup_server(self, address: str) -> ServerLike | None:
        """Server running on address, or None."""
        group = self.lookup_group(address)
        if group is None:
            return None
        return group.server

    def endpoint_keys(self) -> list[EndpointKey]:
        return list(self._groups)

    def groups(self) -> list[ConnectionGroup]:
        return list(self._groups.values())

    def __len__(self) -> int:
        return len(self._groups)

    def __contains__(self, address: object) -> bool:
        return isinstance(address, str) and self.lookup_group(address) is not None

    # ─── Servers ─────────────────────────────────────────────────

    def register_server(self, server: ServerLike, address: str) -> ServerLike | None:
        """Register server under address.

        Returns the server on success, None if the endpoint is already taken.

        With weak handles the registry does not keep the server alive. Once
        the server is collected its endpoint reads as unregistered
        (lookup_server and attach_connection return None), yet the group still
        occupies the key: registering again returns None until
        deregister_server() is called. Connections attached without any other
        strong reference vanish from listings the same way. Callers deregister
        before dropping a server, or build the registry with
        weak_handles=False.
        """
        key = self.normalize(address)
        if key in self._groups:
            logger.debug(
                f"Endpoint already in use: {key}",
                extra={"endpoint_key": key},
            )
            return None
        self._groups[key] = ConnectionGroup.create(
            key, server, weak_handles=self.weak_handles,
        )
        logger.info(f"Server registered on {key}", extra={"endpoint_key": key})
        return server

    def deregister_server(self, address: str) -> None:
        key = self.normalize(address)
        group = self._groups.pop(key, None)
        if group is not None:
            logger.info(
                f"Server deregistered from {key}",
                extra={"endpoint_key": key, "connection_count": group.connection_count},
            )

    def clear(self) -> None:
        """Drop every endpoint."""
        self._groups.clear()

    # ─── Connections ─────────────────────────────────────────────

    def attach_connection(
        self, connection: ConnectionLike, address: str,
    ) -> ServerLike | None:
        """Attach connection to the server listening on address.

        Returns that server, or None when nothing is listening there or the
        connection is already attached. This is how a connection finds its
        server, so None means "connect failed".
        """
        group = self.lookup_group(address)
        if group is None or not group.has_server or group.has_connection(connection):
            logger.debug(
                f"Attach rejected for {address}",
                extra={"endpoint_key": group.key if group else None},
            )
            return None
        group.add_connection(connection)
        logger.debug(
            f"Connection attached to {group.key}",
            extra={"endpoint_key": group.key, "connection_count": group.connection_count},
        )
        return group.server

    def detach_connection(self, connection: ConnectionLike, address: str) -> None:
        group = self.lookup_group(address)
        if group is None:
            return
        if group.remove_connection(connection):
            logger.debug(
                f"Connection detached from {group.key}",
                extra={"endpoint_key": group.key, "connection_count": group.connection_count},
            )
        if self.purge_rooms_on_detach:
            group.purge_memberships(connection)

    def list_connections(
        self,
        address: str,
        room: RoomName | str | None = None,
        excluding: ConnectionLike | None = None,
    ) -> list[ConnectionLike]:
        """Connections on address, optionally only those in room.

        `excluding` drops exactly that handle (by identity), typically the
        broadcaster. Unknown endpoints and never-joined rooms yield [].
        """
        group = self.lookup_group(address)
        if group is None:
            return []
        if room:
            connections = group.room_members(RoomName(room))
        else:
            connections = group.connections
        if excluding is not None:
            connections = [c for c in connections if c is not excluding]
        return connections

    # ─── Rooms ───────────────────────────────────────────────────

    def _group_of(self, connection: ConnectionLike) -> ConnectionGroup | None:
        url = getattr(connection, "url", None)
        if not isinstance(url, str):
            return None
        return self.lookup_group(url)

    def join_room(self, connection: ConnectionLike, room: RoomName | str) -> None:
        """Add an attached connection to room. No-op if it isn't attached."""
        group = self._group_of(connection)
        if group is None or not group.has_server or not group.has_connection(connection):
            logger.debug(f"Join rejected for room {room}", extra={"room": room})
            return
        group.add_room_member(connection, RoomName(room))
        logger.debug(
            f"Connection joined room {room} on {group.key}",
            extra={"endpoint_key": group.key, "room": room},
        )

    def leave_room(self, connection: ConnectionLike, room: RoomName | str) -> None:
        group = self._group_of(connection)
        if group is None:
            return
        if group.remove_room_member(connection, RoomName(room)):
            logger.debug(
                f"Connection left room {room} on {group.key}",
                extra={"endpoint_key": group.key, "room": room},
            )

    def rooms_of(self, connection: ConnectionLike) -> list[RoomName]:
        group = self._group_of(connection)
        if group is None:
            return []
        return group.rooms_of(connection)
