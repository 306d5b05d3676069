"""Ident metrics protocol."""

from __future__ import annotations

from typing import Protocol


class IdentMetricsProtocol(Protocol):
    """Protocol for recording ident responder metrics."""

    def record_query(self, reply_type: str, error: str = "") -> None:
        """Record one answered query."""
        ...

    def set_registered_owners(self, count: int) -> None:
        """Set the number of registered owners."""
        ...

    def set_listener_active(self, active: bool) -> None:
        """Set whether the listener is open."""
        ...

    def record_bind_failure(self) -> None:
        """Record a failed attempt to open the listener."""
        ...
