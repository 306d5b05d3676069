"""Live socket addressing of an owner's outbound connection."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LiveAddressing:
    """Addressing of an established outbound connection, read at query time.

    Ports are only known once the outbound socket has connected, so this is
    fetched fresh for every resolution rather than cached at registration.

    Attributes:
        local_ip: Address the relay connected from.
        local_port: Ephemeral port the relay connected from.
        remote_ip: Address of the remote server.
        remote_port: Port of the remote server, e.g. 6667.
    """

    local_ip: str
    local_port: int
    remote_ip: str
    remote_port: int
