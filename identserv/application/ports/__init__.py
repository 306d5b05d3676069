"""Application ports: the interfaces identserv consumes from its host relay."""

from identserv.application.ports.ident_metrics import IdentMetricsProtocol
from identserv.application.ports.ident_owner import (
    IdentOwnerProtocol,
    owner_label,
)
from identserv.application.ports.listener_factory import (
    ConnectionCallback,
    ListenerFactoryProtocol,
    ListenerHandleProtocol,
)
from identserv.application.ports.owner_directory import OwnerDirectoryProtocol

__all__: list[str] = [
    "ConnectionCallback",
    "IdentMetricsProtocol",
    "IdentOwnerProtocol",
    "ListenerFactoryProtocol",
    "ListenerHandleProtocol",
    "OwnerDirectoryProtocol",
    "owner_label",
]
