"""In-memory stubs for identserv ports (tests and development)."""

from identserv.infrastructure.stubs.listener_factory_stub import (
    ListenerFactoryStub,
    ListenerHandleStub,
)
from identserv.infrastructure.stubs.owner_directory_stub import (
    IdentOwnerStub,
    OwnerDirectoryStub,
)

__all__: list[str] = [
    "IdentOwnerStub",
    "ListenerFactoryStub",
    "ListenerHandleStub",
    "OwnerDirectoryStub",
]
