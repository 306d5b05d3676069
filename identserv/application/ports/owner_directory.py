"""Owner directory protocol.

Resolution scans every owner the host knows about, across all accounts,
not only the owners registered with the listener. Registration only
decides whether the listener is open.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from identserv.application.ports.ident_owner import IdentOwnerProtocol


class OwnerDirectoryProtocol(Protocol):
    """Protocol for enumerating all known owners."""

    def list_all_known_owners(self) -> Iterable[IdentOwnerProtocol]:
        """List every owner across every account, in a stable order.

        The order matters: among fallback matches the last one listed wins.
        """
        ...
