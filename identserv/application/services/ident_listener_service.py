"""Listener lifecycle manager.

Keeps one shared ident listener open exactly while at least one owner is
registered. Registration is the reference count:

    register(A)    -> listener opened, registry {A}
    register(B)    -> listener shared, registry {A, B}
    unregister(A)  -> registry {B}
    unregister(B)  -> registry {}, listener closed

A failed bind sets a sticky listen_failed flag, leaves the registry
unchanged and lets the owner's connection attempt go ahead without ident.
The flag is cleared only by a later bind that succeeds.

Registration, unregistration and listener open/close are serialized by one
asyncio.Lock. Connection handling never takes that lock.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable
from typing import TYPE_CHECKING

from identserv.application.ports.ident_owner import owner_label
from identserv.application.services.base import LoggingMixin
from identserv.application.services.pending_registry import (
    PendingConnectionRegistry,
)
from identserv.domain.errors.ident import ListenerBindError
from identserv.domain.models.listener import (
    IdentListenerStatus,
    ListenerState,
    RegistrationOutcome,
)

if TYPE_CHECKING:
    from identserv.application.ports.ident_metrics import IdentMetricsProtocol
    from identserv.application.ports.ident_owner import IdentOwnerProtocol
    from identserv.application.ports.listener_factory import (
        ListenerFactoryProtocol,
        ListenerHandleProtocol,
    )
    from identserv.application.services.ident_connection_handler import (
        IdentConnectionHandler,
    )
    from identserv.application.services.ident_resolver import IdentResolver
    from identserv.config.ident_config import IdentServerConfig


class IdentListenerService(LoggingMixin):
    """Reference-counted owner of the ident listener and registry.

    Usage:
        service = IdentListenerService(
            config=config,
            listener_factory=AsyncioListenerFactory(config),
            resolver=resolver,
            connection_handler=handler,
        )
        outcome = await service.register(owner)   # outbound attempt starts
        ...
        await service.unregister(owner)           # attempt concluded
    """

    def __init__(
        self,
        *,
        config: IdentServerConfig,
        listener_factory: ListenerFactoryProtocol,
        resolver: IdentResolver,
        connection_handler: IdentConnectionHandler,
        metrics: IdentMetricsProtocol | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            config: Listener configuration (host, port).
            listener_factory: Opens the listening socket.
            resolver: Resolver whose last request/reply STATUS reports.
            connection_handler: Serves each accepted connection.
            metrics: Optional metrics sink.
        """
        self._config = config
        self._listener_factory = listener_factory
        self._resolver = resolver
        self._connection_handler = connection_handler
        self._metrics = metrics
        self._registry = PendingConnectionRegistry()
        self._listener: ListenerHandleProtocol | None = None
        self._listen_failed = False
        self._lock = asyncio.Lock()
        self._init_logger()

    @property
    def listen_failed(self) -> bool:
        return self._listen_failed

    @property
    def is_listening(self) -> bool:
        return self._listener is not None

    @property
    def in_use(self) -> bool:
        return not self._registry.is_empty

    def is_registered(self, owner: IdentOwnerProtocol) -> bool:
        return owner in self._registry

    async def register(self, owner: IdentOwnerProtocol) -> RegistrationOutcome:
        """Signal that `owner` is starting an outbound connection attempt.

        Opens the listener if none is open, then adds the owner to the
        registry. Registering an owner twice is a no-op.

        Args:
            owner: The connection attempt needing ident service.

        Returns:
            STARTED, ALREADY_ACTIVE, or LISTEN_FAILED.
        """
        log = self._log_operation("register", owner=owner_label(owner))

        async with self._lock:
            outcome = RegistrationOutcome.ALREADY_ACTIVE

            if self._listener is None:
                log.info(
                    "ident_listener_starting",
                    host=self._config.bind_host,
                    port=self._config.port,
                )
                try:
                    self._listener = await self._listener_factory.bind_listener(
                        self._config.bind_host,
                        self._config.port,
                        self._on_connection,
                    )
                except ListenerBindError as e:
                    self._listen_failed = True
                    if self._metrics is not None:
                        self._metrics.record_bind_failure()
                    log.warning("ident_listener_bind_failed", error=str(e))
                    return RegistrationOutcome.LISTEN_FAILED

                self._listen_failed = False
                outcome = RegistrationOutcome.STARTED
                log.info(
                    "ident_listener_started",
                    address=self._listener.address,
                    port=self._listener.port,
                )

            if not self._registry.add(owner):
                log.debug("ident_owner_already_registered")

            self._publish_gauges()
            return outcome

    async def unregister(self, owner: IdentOwnerProtocol) -> bool:
        """Signal that `owner`'s outbound attempt has concluded.

        Closes the listener once no owner remains. Safe to call for an owner
        that was never registered, or when no listener was ever opened.

        Returns:
            True if the owner was registered, False otherwise.
        """
        return await self.unregister_many((owner,)) > 0

    async def unregister_many(self, owners: Iterable[IdentOwnerProtocol]) -> int:
        """Release several owners in one step.

        Used when an account or network is deleted and all of its
        connections stop needing ident service at once.

        Returns:
            Number of owners that were actually registered.
        """
        async with self._lock:
            removed = 0
            for owner in owners:
                if self._registry.remove(owner):
                    removed += 1
                else:
                    self._log_operation(
                        "unregister", owner=owner_label(owner)
                    ).debug("ident_owner_not_registered")

            if self._registry.is_empty:
                await self._close_listener()

            self._publish_gauges()
            return removed

    async def shutdown(self) -> None:
        """Close the listener and forget every owner."""
        async with self._lock:
            self._registry.clear()
            await self._close_listener()
            self._publish_gauges()

    def status(self) -> IdentListenerStatus:
        """Snapshot the listener state for the admin surface."""
        owners = tuple(owner_label(o) for o in self._registry.snapshot())
        common = {
            "owners": owners,
            "listen_failed": self._listen_failed,
            "last_request": self._resolver.last_request,
            "last_reply": self._resolver.last_reply,
        }

        if self._listener is not None:
            return IdentListenerStatus(
                state=ListenerState.LISTENING,
                address=self._listener.address,
                port=self._listener.port,
                **common,
            )
        if self._listen_failed:
            return IdentListenerStatus(state=ListenerState.FAILED, **common)
        return IdentListenerStatus(state=ListenerState.INACTIVE, **common)

    async def _close_listener(self) -> None:
        if self._listener is None:
            return
        listener = self._listener
        self._listener = None
        self._log_operation("close_listener").info(
            "ident_listener_closing", address=listener.address, port=listener.port
        )
        await listener.close()

    async def _on_connection(
        self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter
    ) -> None:
        # A connection can race with the last unregister; nobody to answer for.
        if not self.in_use:
            await self._connection_handler.reject(writer)
            return
        await self._connection_handler.handle(reader, writer)

    def _publish_gauges(self) -> None:
        if self._metrics is None:
            return
        self._metrics.set_registered_owners(len(self._registry))
        self._metrics.set_listener_active(self._listener is not None)
