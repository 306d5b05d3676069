"""Pending-connection registry.

The set of owners currently waiting on an ident probe. Its emptiness is the
only thing that decides whether the listener is open. It is not a cache of
identities: the resolver always asks owners for their live addressing.

Owners are kept by identity, at most once each, in registration order.
The registry performs no locking; IdentListenerService serializes access.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from identserv.application.ports.ident_owner import IdentOwnerProtocol


class PendingConnectionRegistry:
    """Identity-keyed, insertion-ordered set of owners."""

    def __init__(self) -> None:
        self._owners: dict[int, IdentOwnerProtocol] = {}

    def add(self, owner: IdentOwnerProtocol) -> bool:
        """Add an owner.

        Returns:
            True if added, False if it was already registered.
        """
        key = id(owner)
        if key in self._owners:
            return False
        self._owners[key] = owner
        return True

    def remove(self, owner: IdentOwnerProtocol) -> bool:
        """Remove an owner.

        Returns:
            True if removed, False if it was not registered.
        """
        return self._owners.pop(id(owner), None) is not None

    def clear(self) -> None:
        self._owners.clear()

    def snapshot(self) -> tuple[IdentOwnerProtocol, ...]:
        """Registered owners in registration order."""
        return tuple(self._owners.values())

    @property
    def is_empty(self) -> bool:
        return not self._owners

    def __contains__(self, owner: object) -> bool:
        return id(owner) in self._owners

    def __len__(self) -> int:
        return len(self._owners)
