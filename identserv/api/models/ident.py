"""Ident admin API models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from identserv.domain.models.listener import IdentListenerStatus, ListenerState


class IdentStatusResponse(BaseModel):
    """Listener status.

    Owners and the last request/reply are only filled in for admins.
    """

    state: ListenerState
    address: str | None = None
    port: int | None = None
    listen_failed: bool = False
    owners: list[str] | None = None
    last_request: str | None = None
    last_reply: str | None = None

    @classmethod
    def from_status(
        cls, status: IdentListenerStatus, *, is_admin: bool
    ) -> IdentStatusResponse:
        response = cls(
            state=status.state,
            address=status.address,
            port=status.port,
            listen_failed=status.listen_failed,
        )
        if is_admin:
            response.owners = list(status.owners)
            response.last_request = status.last_request
            response.last_reply = status.last_reply
        return response


class IdentCommandRequest(BaseModel):
    """A command for the ident admin surface, e.g. "STATUS"."""

    command: str = Field(..., max_length=512)
    admin: bool = False


class IdentCommandResponse(BaseModel):
    """Output lines of an admin command."""

    lines: list[str]
