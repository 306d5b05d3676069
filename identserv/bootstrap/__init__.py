"""Bootstrap wiring for identserv."""

from identserv.bootstrap.ident import (
    IdentServices,
    build_ident_services,
    load_ident_config,
)
from identserv.bootstrap.logging import configure_structlog

__all__: list[str] = [
    "IdentServices",
    "build_ident_services",
    "configure_structlog",
    "load_ident_config",
]
