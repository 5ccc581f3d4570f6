"""Domain Types — rich types that replace bare primitives across the registry.

Invariants:
    - EndpointKey is always the output of normalize_endpoint(), never a raw address
    - RoomName is any non-empty string; an empty room name means "no room"

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

EndpointKey = NewType("EndpointKey", str)
RoomName = NewType("RoomName", str)


# ─── Enums ───────────────────────────────────────────────────────

class LogFormat(str, Enum):
    """Supported log output formats."""
    JSON = "json"
    TEXT = "text"
