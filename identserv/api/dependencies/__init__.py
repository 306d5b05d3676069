"""API dependencies for dependency injection."""

from identserv.api.dependencies.ident import (
    get_ident_admin_service,
    get_ident_listener_service,
    init_ident_services,
    is_initialized,
    reset_ident_services,
)

__all__: list[str] = [
    "get_ident_admin_service",
    "get_ident_listener_service",
    "init_ident_services",
    "is_initialized",
    "reset_ident_services",
]
