"""asyncio implementation of the listener factory.

Each accepted connection is served in its own task by asyncio.start_server.
The reader limit is the configured maximum line length, so an overlong
request makes readline() fail instead of buffering without bound.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from identserv.domain.errors.ident import ListenerBindError

if TYPE_CHECKING:
    from identserv.application.ports.listener_factory import ConnectionCallback
    from identserv.config.ident_config import IdentServerConfig

logger = logging.getLogger(__name__)


class AsyncioListenerHandle:
    """An open asyncio.Server.

    Attributes:
        address: First bound socket's address.
        port: First bound socket's port (the real one when bound to port 0).
    """

    def __init__(self, server: asyncio.Server) -> None:
        self._server = server
        sockname = server.sockets[0].getsockname()
        self._address = str(sockname[0])
        self._port = int(sockname[1])

    @property
    def address(self) -> str:
        return self._address

    @property
    def port(self) -> int:
        return self._port

    async def close(self) -> None:
        """Stop listening.

        Does not wait for in-flight connections; each is bounded by the
        idle timeout and closes itself after replying.
        """
        self._server.close()
        logger.debug("Closed ident listener on %s:%d", self._address, self._port)


class AsyncioListenerFactory:
    """Opens the ident listener with asyncio.start_server."""

    def __init__(self, config: IdentServerConfig) -> None:
        """Initialize the factory.

        Args:
            config: Supplies the line limit and listen backlog.
        """
        self._config = config

    async def bind_listener(
        self, host: str, port: int, on_connection: ConnectionCallback
    ) -> AsyncioListenerHandle:
        """Bind and start listening.

        Raises:
            ListenerBindError: If the OS refuses the bind or listen.
        """
        try:
            server = await asyncio.start_server(
                on_connection,
                host=host or None,
                port=port,
                limit=self._config.max_line_length,
                backlog=self._config.backlog,
                reuse_address=True,
            )
        except OSError as e:
            logger.warning("Could not listen on %s:%d: %s", host or "*", port, e)
            raise ListenerBindError(host, port, str(e)) from e

        handle = AsyncioListenerHandle(server)
        logger.debug("Listening for ident on %s:%d", handle.address, handle.port)
        return handle
