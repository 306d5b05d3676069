"""Owner directory stub for testing ident resolution.

Stands in for the host relay's account/connection registry. Owners are
listed in insertion order, which makes fallback tie-breaks deterministic.

Developer Golden Rules:
1. SNAPSHOT - list_all_known_owners() returns a copy, safe to mutate during a scan
2. CONFIGURABLE - owners can connect, disconnect, or fail on lookup
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from identserv.domain.models.owner import LiveAddressing


class OwnerLookupError(RuntimeError):
    """Raised by a stub owner configured to fail, e.g. torn down mid-scan."""


@dataclass(eq=False)
class IdentOwnerStub:
    """In-memory owner: one account's one outbound connection.

    Compared and hashed by identity, like the host's connection objects.

    Attributes:
        account_name: Account the connection belongs to.
        connection_name: Network/connection name within the account.
        identity: Identity reported in USERID replies.
        addressing: Live addressing, or None while not connected.
        fail_lookup: If True, every query raises OwnerLookupError.
    """

    account_name: str
    connection_name: str
    identity: str
    addressing: LiveAddressing | None = None
    fail_lookup: bool = False

    @classmethod
    def connected(
        cls,
        account_name: str,
        connection_name: str,
        *,
        local: tuple[str, int],
        remote: tuple[str, int],
        identity: str | None = None,
    ) -> "IdentOwnerStub":
        """Create an owner whose outbound socket is already established."""
        return cls(
            account_name=account_name,
            connection_name=connection_name,
            identity=identity if identity is not None else account_name,
            addressing=LiveAddressing(
                local_ip=local[0],
                local_port=local[1],
                remote_ip=remote[0],
                remote_port=remote[1],
            ),
        )

    def connect(self, addressing: LiveAddressing) -> None:
        self.addressing = addressing

    def disconnect(self) -> None:
        self.addressing = None

    def get_live_addressing(self) -> LiveAddressing | None:
        if self.fail_lookup:
            raise OwnerLookupError(
                f"{self.account_name}/{self.connection_name} is gone"
            )
        return self.addressing

    def get_identity_string(self) -> str:
        if self.fail_lookup:
            raise OwnerLookupError(
                f"{self.account_name}/{self.connection_name} is gone"
            )
        return self.identity


class OwnerDirectoryStub:
    """In-memory OwnerDirectoryProtocol implementation.

    Usage:
        directory = OwnerDirectoryStub()
        owner = directory.add_owner(IdentOwnerStub.connected(
            "alice", "net1", local=("1.2.3.4", 54321), remote=("5.6.7.8", 6667),
        ))
    """

    def __init__(self, owners: Iterable[IdentOwnerStub] = ()) -> None:
        self._owners: list[IdentOwnerStub] = list(owners)
        self.enumeration_count = 0

    def add_owner(self, owner: IdentOwnerStub) -> IdentOwnerStub:
        self._owners.append(owner)
        return owner

    def remove_owner(self, owner: IdentOwnerStub) -> bool:
        for i, existing in enumerate(self._owners):
            if existing is owner:
                del self._owners[i]
                return True
        return False

    def owners_of(self, account_name: str) -> list[IdentOwnerStub]:
        return [o for o in self._owners if o.account_name == account_name]

    def clear(self) -> None:
        self._owners.clear()

    def list_all_known_owners(self) -> tuple[IdentOwnerStub, ...]:
        self.enumeration_count += 1
        return tuple(self._owners)
