"""Accepted-connection handler.

One request, one reply, then close:

1. Read a single line, bounded by the reader's limit and an idle timeout.
2. Resolve it against the local and remote IP of *this* connection.
3. Write the reply with CRLF and close once it is flushed.

A second line is never read. A line that overruns the limit still gets an
INVALID-PORT reply; a peer that sends nothing before the timeout or before
closing gets no reply.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

from identserv.application.services.base import LoggingMixin
from identserv.application.services.ident_protocol import error_reply
from identserv.domain.models.ident import IdentErrorToken
from identserv.infrastructure.observability.correlation import (
    generate_correlation_id,
    set_correlation_id,
)

if TYPE_CHECKING:
    from identserv.application.services.ident_resolver import IdentResolver
    from identserv.config.ident_config import IdentServerConfig

LINE_TERMINATOR = "\r\n"


def _host_of(sock_address: Any) -> str:
    if isinstance(sock_address, tuple) and sock_address:
        return str(sock_address[0])
    return ""


class IdentConnectionHandler(LoggingMixin):
    """Serves accepted ident connections.

    Each call runs in its own task, so queries never wait on each other.
    The handler holds an explicit reference to its resolver.
    """

    def __init__(self, resolver: IdentResolver, config: IdentServerConfig) -> None:
        """Initialize the handler.

        Args:
            resolver: Resolver that turns a request line into a reply.
            config: Supplies the idle timeout.
        """
        self._resolver = resolver
        self._config = config
        self._init_logger()

    async def handle(
        self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter
    ) -> None:
        """Answer one ident query on an accepted connection.

        A malformed or overlong line is answered with INVALID-PORT. A peer
        that does not finish a line before the idle timeout, or closes
        before sending anything, gets no reply.
        """
        set_correlation_id(generate_correlation_id())
        socket_ip = _host_of(writer.get_extra_info("sockname"))
        remote_ip = _host_of(writer.get_extra_info("peername"))
        log = self._log_operation(
            "handle_connection", socket_ip=socket_ip, remote_ip=remote_ip
        )
        log.debug("ident_connection_accepted")

        try:
            try:
                data = await asyncio.wait_for(
                    reader.readline(), timeout=self._config.idle_timeout_seconds
                )
            except asyncio.TimeoutError:
                log.info(
                    "ident_connection_idle_timeout",
                    timeout_seconds=self._config.idle_timeout_seconds,
                )
                return
            except ValueError:
                # readline() raises ValueError once the line overruns the limit
                log.info(
                    "ident_request_too_long",
                    max_line_length=self._config.max_line_length,
                )
                reply_line = error_reply(0, 0, IdentErrorToken.INVALID_PORT).to_line()
            else:
                if not data:
                    log.debug("ident_connection_closed_without_request")
                    return
                line = data.decode("utf-8", errors="replace")
                reply_line = self._resolver.resolve(line, socket_ip, remote_ip).to_line()

            writer.write((reply_line + LINE_TERMINATOR).encode("utf-8"))
            await writer.drain()
            log.debug("ident_reply_sent", reply=reply_line)
        except (ConnectionError, OSError) as e:
            log.debug("ident_connection_error", error=str(e))
        finally:
            await self._close(writer, log)

    async def reject(self, writer: asyncio.StreamWriter) -> None:
        """Close an accepted connection without reading or answering it."""
        log = self._log_operation("reject_connection")
        log.debug("ident_connection_rejected_idle")
        await self._close(writer, log)

    async def _close(self, writer: asyncio.StreamWriter, log: Any) -> None:
        writer.close()
        try:
            await writer.wait_closed()
        except (ConnectionError, OSError) as e:
            log.debug("ident_connection_close_error", error=str(e))
