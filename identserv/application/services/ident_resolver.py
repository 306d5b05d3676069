"""Ident resolver: maps a queried port pair to the owner that holds it.

Matching rules, applied to every owner the directory lists, in order:

1. EXACT - local port, remote port and local IP all agree with the query
   and with the address the querying peer connected to. The first exact
   match ends the scan.
2. FALLBACK - remote IP and remote port agree with the querying peer and
   the queried remote port, and the local IP agrees. The scan keeps going;
   a later fallback replaces an earlier one, and any exact match beats all
   fallbacks.

The scan is synchronous. Under asyncio it cannot interleave with
registration or with another query, so each resolution sees a point-in-time
view of the owners and their live addressing. No lock is held while the
reply is written.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from identserv.application.ports.ident_owner import owner_label
from identserv.application.services.base import LoggingMixin
from identserv.application.services.ident_protocol import (
    error_reply,
    parse_request,
    userid_reply,
)
from identserv.domain.errors.ident import InvalidPortError
from identserv.domain.models.ident import IdentErrorToken, IdentReply, IdentRequest

if TYPE_CHECKING:
    from identserv.application.ports.ident_metrics import IdentMetricsProtocol
    from identserv.application.ports.owner_directory import OwnerDirectoryProtocol
    from identserv.domain.models.owner import LiveAddressing

# Textual prefix of an IPv4-mapped IPv6 address
IPV4_MAPPED_PREFIX = "::ffff:"


def _strip_mapped_prefix(ip: str) -> str:
    if ip.startswith(IPV4_MAPPED_PREFIX):
        return ip[len(IPV4_MAPPED_PREFIX) :]
    return ip


def addresses_equal(first: str, second: str) -> bool:
    """Compare two textual IPs, treating ::ffff:a.b.c.d as a.b.c.d.

    Example:
        >>> addresses_equal("::ffff:10.0.0.1", "10.0.0.1")
        True
    """
    return _strip_mapped_prefix(first) == _strip_mapped_prefix(second)


def _collapse_request_text(line: str) -> str:
    return line.replace("\r", "").replace("\n", " ").strip()


class IdentResolver(LoggingMixin):
    """Answers ident queries from the host's live set of owners.

    Resolution never raises: every path produces a well-formed reply.
    The last request and reply are kept for the admin STATUS command.

    Usage:
        resolver = IdentResolver(owner_directory=directory)
        reply = resolver.resolve("54321, 6667", "1.2.3.4", "5.6.7.8")
        reply.to_line()  # "54321, 6667 : USERID : UNIX : alice"
    """

    def __init__(
        self,
        owner_directory: OwnerDirectoryProtocol,
        metrics: IdentMetricsProtocol | None = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            owner_directory: Enumerates every owner across all accounts.
            metrics: Optional metrics sink for answered queries.
        """
        self._owner_directory = owner_directory
        self._metrics = metrics
        self._last_request = ""
        self._last_reply = ""
        self._init_logger()

    @property
    def last_request(self) -> str:
        return self._last_request

    @property
    def last_reply(self) -> str:
        return self._last_reply

    def resolve(self, line: str, socket_ip: str, remote_ip: str) -> IdentReply:
        """Resolve one request line.

        Args:
            line: Raw request text as read from the ident connection.
            socket_ip: Local address of the ident connection (what the peer
                connected to).
            remote_ip: Remote address of the ident connection (where the
                query came from).

        Returns:
            The reply to send back.
        """
        log = self._log_operation(
            "resolve", socket_ip=socket_ip, remote_ip=remote_ip
        )
        log.debug("ident_request_received", request=line)

        try:
            request = parse_request(line)
        except InvalidPortError as e:
            log.info("ident_request_invalid", error=str(e))
            reply = error_reply(0, 0, e.token)
        else:
            reply = self._find_owner(request, socket_ip, remote_ip)

        self._last_request = (
            f"{_collapse_request_text(line)} from {remote_ip} on {socket_ip}"
        )
        self._last_reply = reply.to_line()

        if self._metrics is not None:
            error = "" if reply.is_match else reply.additional_info
            self._metrics.record_query(reply.reply_type.value, error)

        log.info("ident_request_resolved", reply=self._last_reply)
        return reply

    def _find_owner(
        self, request: IdentRequest, socket_ip: str, remote_ip: str
    ) -> IdentReply:
        log = self._log_operation(
            "find_owner",
            local_port=request.local_port,
            remote_port=request.remote_port,
        )
        reply = error_reply(
            request.local_port, request.remote_port, IdentErrorToken.NO_USER
        )

        try:
            owners = list(self._owner_directory.list_all_known_owners())
        except Exception as e:
            log.error(
                "ident_owner_enumeration_failed",
                error=str(e),
                error_type=type(e).__name__,
            )
            return reply

        for owner in owners:
            try:
                addressing = owner.get_live_addressing()
                if addressing is None:
                    continue

                log.debug(
                    "ident_checking_owner",
                    owner=owner_label(owner),
                    owner_local_port=addressing.local_port,
                    owner_remote_port=addressing.remote_port,
                    owner_local_ip=addressing.local_ip,
                    owner_remote_ip=addressing.remote_ip,
                )

                if _is_exact_match(addressing, request, socket_ip):
                    log.debug("ident_exact_match", owner=owner_label(owner))
                    return userid_reply(request, owner.get_identity_string())

                if _is_fallback_match(addressing, request, socket_ip, remote_ip):
                    log.debug("ident_fallback_match", owner=owner_label(owner))
                    reply = userid_reply(request, owner.get_identity_string())
            except Exception as e:
                # Owner went away mid-scan; it can only be missed.
                log.warning(
                    "ident_owner_lookup_failed",
                    error=str(e),
                    error_type=type(e).__name__,
                )

        return reply


def _is_exact_match(
    addressing: LiveAddressing, request: IdentRequest, socket_ip: str
) -> bool:
    return (
        addressing.local_port == request.local_port
        and addressing.remote_port == request.remote_port
        and addresses_equal(addressing.local_ip, socket_ip)
    )


def _is_fallback_match(
    addressing: LiveAddressing,
    request: IdentRequest,
    socket_ip: str,
    remote_ip: str,
) -> bool:
    return (
        addressing.remote_ip == remote_ip
        and addressing.remote_port == request.remote_port
        and addresses_equal(addressing.local_ip, socket_ip)
    )
