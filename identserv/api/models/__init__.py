"""API response and request models."""

from identserv.api.models.health import HealthResponse
from identserv.api.models.ident import (
    IdentCommandRequest,
    IdentCommandResponse,
    IdentStatusResponse,
)

__all__: list[str] = [
    "HealthResponse",
    "IdentCommandRequest",
    "IdentCommandResponse",
    "IdentStatusResponse",
]
