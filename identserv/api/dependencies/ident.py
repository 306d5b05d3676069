"""Ident API dependencies.

The host relay wires identserv at startup and hands the result to
init_ident_services(); the routes then resolve services from here.
"""

from __future__ import annotations

from identserv.application.services.ident_admin_service import IdentAdminService
from identserv.application.services.ident_listener_service import (
    IdentListenerService,
)
from identserv.bootstrap.ident import IdentServices

_ident_services: IdentServices | None = None


def init_ident_services(services: IdentServices) -> IdentServices:
    """Install the wired ident services. Call once at startup."""
    global _ident_services
    _ident_services = services
    return _ident_services


def _require_services() -> IdentServices:
    if _ident_services is None:
        raise RuntimeError(
            "Ident services not initialized. Call init_ident_services() at startup."
        )
    return _ident_services


def get_ident_listener_service() -> IdentListenerService:
    """Get the IdentListenerService singleton.

    Raises:
        RuntimeError: If services were not initialized.
    """
    return _require_services().listener_service


def get_ident_admin_service() -> IdentAdminService:
    """Get the IdentAdminService singleton.

    Raises:
        RuntimeError: If services were not initialized.
    """
    return _require_services().admin_service


def is_initialized() -> bool:
    return _ident_services is not None


def reset_ident_services() -> None:
    """Reset the singleton for testing."""
    global _ident_services
    _ident_services = None
