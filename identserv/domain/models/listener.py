"""Listener lifecycle values."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class RegistrationOutcome(str, Enum):
    """Result of asking for ident service on behalf of an owner.

    STARTED: the listener was opened by this call.
    ALREADY_ACTIVE: a listener was already open and is shared.
    LISTEN_FAILED: the listener could not be opened; the owner was not
        registered and its connection attempt proceeds without ident.
    """

    STARTED = "started"
    ALREADY_ACTIVE = "already_active"
    LISTEN_FAILED = "listen_failed"


class ListenerState(str, Enum):
    """Observable state of the shared listener."""

    INACTIVE = "inactive"
    LISTENING = "listening"
    FAILED = "failed"


@dataclass(frozen=True)
class IdentListenerStatus:
    """Point-in-time snapshot of the listener for the admin surface.

    Attributes:
        state: LISTENING while a listener is open, FAILED when none is open
            and the last bind attempt failed, INACTIVE otherwise.
        address: Bound address while listening.
        port: Bound port while listening.
        owners: "<account>/<connection>" label of every registered owner.
        listen_failed: Sticky flag from the last bind attempt.
        last_request: Last request text seen by the resolver.
        last_reply: Last reply line produced by the resolver.
    """

    state: ListenerState
    address: str | None = None
    port: int | None = None
    owners: tuple[str, ...] = field(default_factory=tuple)
    listen_failed: bool = False
    last_request: str = ""
    last_reply: str = ""

    @property
    def is_listening(self) -> bool:
        return self.state is ListenerState.LISTENING
