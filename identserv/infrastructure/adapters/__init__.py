"""Infrastructure adapters for identserv."""

from identserv.infrastructure.adapters.asyncio_listener import (
    AsyncioListenerFactory,
    AsyncioListenerHandle,
)

__all__: list[str] = ["AsyncioListenerFactory", "AsyncioListenerHandle"]
