"""RFC 1413 request parsing and reply formatting.

Pure functions with no state, kept apart from the resolver so the wire
syntax can be tested without any owners or sockets.

Request syntax (spaces, tabs and line terminators around the numbers and
the comma are tolerated):

    <local-port> , <remote-port>

Reply syntax:

    <local-port>, <remote-port> : <USERID|ERROR> : <additional-info>
"""

from __future__ import annotations

import re

from identserv.domain.errors.ident import InvalidPortError
from identserv.domain.models.ident import (
    IDENT_OPSYS,
    IdentErrorToken,
    IdentReply,
    IdentReplyType,
    IdentRequest,
)

MAX_PORT = 65535

# ASCII whitespace only; \s would also match U+00A0 and U+0085
_WS = r"[ \t\r\n]*"
_REQUEST_RE = re.compile(rf"{_WS}([0-9]+){_WS},{_WS}([0-9]+){_WS}")


def parse_request(line: str) -> IdentRequest:
    """Parse one request line into its port pair.

    Args:
        line: Request text, with or without its line terminator.

    Returns:
        The parsed IdentRequest.

    Raises:
        InvalidPortError: Wrong arity, non-numeric, or out of 16-bit range.
    """
    match = _REQUEST_RE.fullmatch(line)
    if match is None:
        raise InvalidPortError(line)

    local_port = int(match.group(1))
    remote_port = int(match.group(2))
    if local_port > MAX_PORT or remote_port > MAX_PORT:
        raise InvalidPortError(line)

    return IdentRequest(local_port=local_port, remote_port=remote_port)


def format_reply(
    local_port: int,
    remote_port: int,
    reply_type: IdentReplyType | str,
    additional_info: str,
) -> str:
    """Render a reply line (without CRLF).

    Example:
        >>> format_reply(4321, 113, "USERID", "UNIX : alice")
        '4321, 113 : USERID : UNIX : alice'
    """
    return IdentReply(
        local_port=local_port,
        remote_port=remote_port,
        reply_type=IdentReplyType(reply_type),
        additional_info=additional_info,
    ).to_line()


def userid_reply(request: IdentRequest, identity: str) -> IdentReply:
    """Build the USERID reply reporting `identity` for `request`."""
    return IdentReply(
        local_port=request.local_port,
        remote_port=request.remote_port,
        reply_type=IdentReplyType.USERID,
        additional_info=f"{IDENT_OPSYS} : {identity}",
    )


def error_reply(
    local_port: int, remote_port: int, token: IdentErrorToken
) -> IdentReply:
    """Build an ERROR reply carrying `token`."""
    return IdentReply(
        local_port=local_port,
        remote_port=remote_port,
        reply_type=IdentReplyType.ERROR,
        additional_info=token.value,
    )
