"""Application services for identserv."""

from identserv.application.services.ident_admin_service import IdentAdminService
from identserv.application.services.ident_connection_handler import (
    IdentConnectionHandler,
)
from identserv.application.services.ident_listener_service import (
    IdentListenerService,
)
from identserv.application.services.ident_protocol import (
    error_reply,
    format_reply,
    parse_request,
    userid_reply,
)
from identserv.application.services.ident_resolver import (
    IdentResolver,
    addresses_equal,
)
from identserv.application.services.pending_registry import (
    PendingConnectionRegistry,
)

__all__: list[str] = [
    "IdentAdminService",
    "IdentConnectionHandler",
    "IdentListenerService",
    "IdentResolver",
    "PendingConnectionRegistry",
    "addresses_equal",
    "error_reply",
    "format_reply",
    "parse_request",
    "userid_reply",
]
