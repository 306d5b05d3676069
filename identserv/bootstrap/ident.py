"""Bootstrap wiring for the ident listener.

The host relay supplies its owner directory and calls register()/
unregister() on the returned listener service as outbound connection
attempts start and conclude:

    services = build_ident_services(owner_directory=relay.owners)
    await services.listener_service.register(owner)
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from identserv.application.services.ident_admin_service import IdentAdminService
from identserv.application.services.ident_connection_handler import (
    IdentConnectionHandler,
)
from identserv.application.services.ident_listener_service import (
    IdentListenerService,
)
from identserv.application.services.ident_resolver import IdentResolver
from identserv.config.ident_config import IdentServerConfig
from identserv.infrastructure.adapters.asyncio_listener import AsyncioListenerFactory
from identserv.infrastructure.monitoring.metrics import get_metrics_collector

if TYPE_CHECKING:
    from identserv.application.ports.ident_metrics import IdentMetricsProtocol
    from identserv.application.ports.listener_factory import ListenerFactoryProtocol
    from identserv.application.ports.owner_directory import OwnerDirectoryProtocol


@dataclass(frozen=True)
class IdentServices:
    """The wired ident components."""

    config: IdentServerConfig
    resolver: IdentResolver
    connection_handler: IdentConnectionHandler
    listener_service: IdentListenerService
    admin_service: IdentAdminService


def load_ident_config(env_file: str | Path | None = None) -> IdentServerConfig:
    """Load IdentServerConfig, reading a .env file first if present.

    Variables already set in the environment take precedence over the file.

    Args:
        env_file: Path to a .env file. Defaults to searching for ".env".
    """
    load_dotenv(dotenv_path=env_file)
    return IdentServerConfig.from_environment()


def build_ident_services(
    owner_directory: OwnerDirectoryProtocol,
    config: IdentServerConfig | None = None,
    listener_factory: ListenerFactoryProtocol | None = None,
    metrics: IdentMetricsProtocol | None = None,
) -> IdentServices:
    """Wire resolver, handler, lifecycle manager and admin commands.

    Args:
        owner_directory: Host capability enumerating every known owner.
        config: Listener configuration; loaded from the environment if None.
        listener_factory: Defaults to the asyncio listener.
        metrics: Metrics sink shared by all components. Defaults to the
            process-wide collector exported at /v1/metrics.
    """
    if config is None:
        config = load_ident_config()
    if listener_factory is None:
        listener_factory = AsyncioListenerFactory(config)
    if metrics is None:
        metrics = get_metrics_collector()

    resolver = IdentResolver(owner_directory=owner_directory, metrics=metrics)
    handler = IdentConnectionHandler(resolver=resolver, config=config)
    listener_service = IdentListenerService(
        config=config,
        listener_factory=listener_factory,
        resolver=resolver,
        connection_handler=handler,
        metrics=metrics,
    )
    return IdentServices(
        config=config,
        resolver=resolver,
        connection_handler=handler,
        listener_service=listener_service,
        admin_service=IdentAdminService(listener_service),
    )
