"""Handle References — non-owning references to caller-owned handles.

Invariants:
    - A HandleRef never compares by equality, only by identity (`is`)
    - A weak HandleRef whose handle was collected resolves to None
    - Handles that cannot be weakly referenced are held strongly

Design Decisions:
    - weakref.ref per handle: the registry must not extend server or socket
      lifetimes; callers still deregister explicitly (no automatic pruning)
"""

import weakref
from typing import Any


class HandleRef:
    """Reference to a server or connection handle, weak when possible."""

    __slots__ = ("_weak", "_strong")

    def __init__(self, handle: Any, weak: bool = True) -> None:
        self._weak: weakref.ref | None = None
        self._strong: Any = None
        if weak:
            try:
                self._weak = weakref.ref(handle)
                return
            except TypeError:
                # ints, strs, __slots__ classes without __weakref__
                pass
        self._strong = handle

    @property
    def is_weak(self) -> bool:
        return self._weak is not None

    @property
    def alive(self) -> bool:
        return self.get() is not None

    def get(self) -> Any:
        """Return the handle, or None if it was collected."""
        if self._weak is not None:
            return self._weak()
        return self._strong

    def refers_to(self, handle: Any) -> bool:
        target = self.get()
        return target is not None and target is handle

    def __repr__(self) -> str:
        kind = "weak" if self.is_weak else "strong"
        return f"HandleRef({kind}, {self.get()!r})"


def live_handles(refs: list[HandleRef]) -> list[Any]:
    """Resolve refs in order, skipping collected handles. Always a fresh list."""
    handles = []
    for ref in refs:
        handle = ref.get()
        if handle is not None:
            handles.append(handle)
    return handles
