"""Ident owner protocol.

An owner is one account's one in-flight outbound connection attempt. The
host relay owns the underlying connection object; identserv only holds the
handle and queries it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from identserv.domain.models.owner import LiveAddressing


class IdentOwnerProtocol(Protocol):
    """Protocol for an outbound connection that may be asked about.

    Implementations must:
    1. Return None from get_live_addressing() until the socket has connected
    2. Return the addressing of the *current* socket, not a cached one
    3. Be hashable by identity (the registry keeps each owner at most once)
    """

    @property
    def account_name(self) -> str:
        """Name of the account this connection belongs to."""
        ...

    @property
    def connection_name(self) -> str:
        """Name of the connection (network) within the account."""
        ...

    def get_live_addressing(self) -> LiveAddressing | None:
        """Get the addressing of the established outbound socket.

        Returns:
            LiveAddressing if connected, None otherwise.
        """
        ...

    def get_identity_string(self) -> str:
        """Get the identity reported in a USERID reply.

        The value is opaque: it is never parsed or validated.
        """
        ...


def owner_label(owner: IdentOwnerProtocol) -> str:
    """Render an owner as "<account>/<connection>"."""
    return f"{owner.account_name}/{owner.connection_name}"
