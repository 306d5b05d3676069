"""Listener factory protocol.

Opening the listener either yields a handle that the lifecycle manager owns
outright until it closes it, or raises ListenerBindError. There is no
half-constructed listener to track after a failed bind.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import Protocol

# Callback invoked for each accepted connection
ConnectionCallback = Callable[
    [asyncio.StreamReader, asyncio.StreamWriter], Awaitable[None]
]


class ListenerHandleProtocol(Protocol):
    """An open listening socket."""

    @property
    def address(self) -> str:
        """Address the listener is bound to."""
        ...

    @property
    def port(self) -> int:
        """Port the listener is bound to."""
        ...

    async def close(self) -> None:
        """Stop accepting and release the socket."""
        ...


class ListenerFactoryProtocol(Protocol):
    """Protocol for opening the shared listening socket."""

    async def bind_listener(
        self, host: str, port: int, on_connection: ConnectionCallback
    ) -> ListenerHandleProtocol:
        """Bind and start listening.

        Args:
            host: Interface to bind ("" for all interfaces).
            port: Port to bind.
            on_connection: Called once per accepted connection.

        Returns:
            Handle to the open listener.

        Raises:
            ListenerBindError: If the socket could not be opened.
        """
        ...
