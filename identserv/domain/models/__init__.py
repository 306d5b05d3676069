"""Domain models for identserv."""

from identserv.domain.models.ident import (
    IdentErrorToken,
    IdentReply,
    IdentReplyType,
    IdentRequest,
)
from identserv.domain.models.listener import (
    IdentListenerStatus,
    ListenerState,
    RegistrationOutcome,
)
from identserv.domain.models.owner import LiveAddressing

__all__: list[str] = [
    "IdentErrorToken",
    "IdentListenerStatus",
    "IdentReply",
    "IdentReplyType",
    "IdentRequest",
    "ListenerState",
    "LiveAddressing",
    "RegistrationOutcome",
]
