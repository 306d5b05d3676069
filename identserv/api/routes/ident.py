"""Ident listener admin endpoints.

- GET /v1/ident/status: listener state (owners and last request/reply for admins)
- POST /v1/ident/commands: the text command surface (HELP, STATUS)

There is no authentication here; the host relay decides who is an admin
and passes that through.
"""

from fastapi import APIRouter, Depends, Query

from identserv.api.dependencies.ident import (
    get_ident_admin_service,
    get_ident_listener_service,
)
from identserv.api.models.ident import (
    IdentCommandRequest,
    IdentCommandResponse,
    IdentStatusResponse,
)
from identserv.application.services.ident_admin_service import IdentAdminService
from identserv.application.services.ident_listener_service import (
    IdentListenerService,
)

router = APIRouter(prefix="/v1/ident", tags=["ident"])


@router.get(
    "/status",
    response_model=IdentStatusResponse,
    summary="Ident listener status",
)
async def get_ident_status(
    admin: bool = Query(False, description="Include owners and last request/reply"),
    listener_service: IdentListenerService = Depends(get_ident_listener_service),
) -> IdentStatusResponse:
    """Return the listener state."""
    return IdentStatusResponse.from_status(listener_service.status(), is_admin=admin)


@router.post(
    "/commands",
    response_model=IdentCommandResponse,
    summary="Run an ident admin command",
)
async def run_ident_command(
    request: IdentCommandRequest,
    admin_service: IdentAdminService = Depends(get_ident_admin_service),
) -> IdentCommandResponse:
    """Run HELP or STATUS and return the output lines."""
    lines = admin_service.handle_command(request.command, is_admin=request.admin)
    return IdentCommandResponse(lines=lines)
