"""RFC 1413 request and reply values.

A request names a port pair as seen by the querying peer: the port on *our*
side of the connection it received, then the port on its own side. A reply
echoes both ports and carries either a USERID or an ERROR token:

    54321, 6667 : USERID : UNIX : alice
    54321, 6667 : ERROR : NO-USER
    0, 0 : ERROR : INVALID-PORT
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

# Operating system field of a USERID reply
IDENT_OPSYS = "UNIX"


class IdentReplyType(str, Enum):
    """Reply type field of an ident response."""

    USERID = "USERID"
    ERROR = "ERROR"


class IdentErrorToken(str, Enum):
    """Error tokens this responder emits."""

    INVALID_PORT = "INVALID-PORT"
    NO_USER = "NO-USER"


@dataclass(frozen=True)
class IdentRequest:
    """A parsed ident query.

    Attributes:
        local_port: Port the relay connected FROM (our side).
        remote_port: Port the relay connected TO, e.g. 6667.
    """

    local_port: int
    remote_port: int


@dataclass(frozen=True)
class IdentReply:
    """A formatted-ready ident response.

    Attributes:
        local_port: Echoed queried local port (0 on INVALID-PORT).
        remote_port: Echoed queried remote port (0 on INVALID-PORT).
        reply_type: USERID or ERROR.
        additional_info: "UNIX : <identity>" for USERID, the token for ERROR.
    """

    local_port: int
    remote_port: int
    reply_type: IdentReplyType
    additional_info: str

    @property
    def is_match(self) -> bool:
        """True if the reply identifies an owner."""
        return self.reply_type is IdentReplyType.USERID

    def to_line(self) -> str:
        """Render the reply without line terminator."""
        return (
            f"{self.local_port}, {self.remote_port} : "
            f"{self.reply_type.value} : {self.additional_info}"
        )
