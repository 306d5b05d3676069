"""Ident responder errors.

Only two failures are exceptional: the listening socket could not be
opened, and a request line could not be parsed. A query that matches no
owner is an ordinary NO-USER reply, and registering twice or releasing an
unknown owner are no-ops, so neither has an exception class.
"""

from __future__ import annotations

from identserv.domain.exceptions import IdentServError
from identserv.domain.models.ident import IdentErrorToken


class IdentProtocolError(IdentServError):
    """Base error for a request that must be answered with an ERROR reply.

    Attributes:
        token: The RFC 1413 error token carried in the reply.
    """

    token: IdentErrorToken = IdentErrorToken.INVALID_PORT


class InvalidPortError(IdentProtocolError):
    """Raised when a request line is not two comma-separated 16-bit ports.

    Attributes:
        line: The offending request text.
    """

    token = IdentErrorToken.INVALID_PORT

    def __init__(self, line: str) -> None:
        """Initialize error with the rejected request line.

        Args:
            line: The request text that failed to parse.
        """
        self.line = line
        super().__init__(f"Malformed ident request: {line!r}")


class ListenerBindError(IdentServError):
    """Raised when the listening socket cannot be opened.

    Attributes:
        host: The interface the bind was attempted on ("" for all).
        port: The configured port.
    """

    def __init__(self, host: str, port: int, reason: str = "") -> None:
        """Initialize error with the bind target.

        Args:
            host: Interface address ("" means all interfaces).
            port: Port that could not be bound.
            reason: Underlying OS error text, if any.
        """
        self.host = host
        self.port = port
        self.reason = reason
        target = f"{host or '*'}:{port}"
        message = f"Could not listen on {target}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
