"""Listener factory stub for testing the listener lifecycle.

Opens no sockets. Records every bind so tests can assert how often the
listener was (re)created, and can be told to fail binds.

Developer Golden Rules:
1. OPERATION_TRACKING - Records all binds and closes for test assertions
2. CONFIGURABLE - set_bind_failure() makes subsequent binds raise
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field

from identserv.application.ports.listener_factory import ConnectionCallback
from identserv.domain.errors.ident import ListenerBindError


@dataclass
class ListenerHandleStub:
    """A pretend open listener."""

    address: str
    port: int
    on_connection: ConnectionCallback
    closed: bool = False

    async def close(self) -> None:
        self.closed = True

    async def simulate_connection(
        self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter
    ) -> None:
        """Deliver an accepted connection as the real server would."""
        if self.closed:
            raise RuntimeError("listener is closed")
        await self.on_connection(reader, writer)


@dataclass
class ListenerFactoryStub:
    """In-memory ListenerFactoryProtocol implementation.

    Attributes:
        address: Address reported by created handles.
        bind_attempts: Number of bind_listener calls.
        handles: Every handle created, oldest first.
    """

    address: str = "127.0.0.1"
    bind_attempts: int = 0
    handles: list[ListenerHandleStub] = field(default_factory=list)
    _fail_binds: bool = False
    _bind_delay: float = 0.0

    def set_bind_failure(self, fail: bool) -> None:
        self._fail_binds = fail

    def set_bind_delay(self, seconds: float) -> None:
        """Make binds yield to the event loop, to expose races in tests."""
        self._bind_delay = seconds

    @property
    def open_handles(self) -> list[ListenerHandleStub]:
        return [h for h in self.handles if not h.closed]

    @property
    def current(self) -> ListenerHandleStub | None:
        open_handles = self.open_handles
        return open_handles[-1] if open_handles else None

    async def bind_listener(
        self, host: str, port: int, on_connection: ConnectionCallback
    ) -> ListenerHandleStub:
        self.bind_attempts += 1
        if self._bind_delay:
            await asyncio.sleep(self._bind_delay)
        if self._fail_binds:
            raise ListenerBindError(host, port, "Address already in use")
        handle = ListenerHandleStub(
            address=host or self.address, port=port, on_connection=on_connection
        )
        self.handles.append(handle)
        return handle
