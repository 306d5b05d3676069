"""Administrative command surface for the ident listener.

Commands (case-insensitive, only the first token counts):
- HELP: table of commands
- STATUS: listener state; admins also see registered owners and the last
  request/reply
- anything else: "Unknown command [<cmd>] try 'Help'"
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from identserv.application.services.base import LoggingMixin

if TYPE_CHECKING:
    from identserv.application.services.ident_listener_service import (
        IdentListenerService,
    )

LISTEN_FAILED_WARNING = "WARNING: Opening the listening socket failed!"
NOT_LISTENING = "IdentServer isn't listening."

COMMANDS: tuple[tuple[str, str], ...] = (
    ("Status", "Displays status information about IdentServer"),
)


def render_table(headers: tuple[str, ...], rows: list[tuple[str, ...]]) -> list[str]:
    """Render rows as a boxed plain-text table, one string per line."""
    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    separator = "+" + "+".join("-" * (w + 2) for w in widths) + "+"

    def fmt(cells: tuple[str, ...]) -> str:
        return "|" + "|".join(f" {c.ljust(w)} " for c, w in zip(cells, widths)) + "|"

    lines = [separator, fmt(headers), separator]
    lines.extend(fmt(row) for row in rows)
    lines.append(separator)
    return lines


class IdentAdminService(LoggingMixin):
    """Text command interface over IdentListenerService.

    Usage:
        admin = IdentAdminService(listener_service)
        for line in admin.handle_command("status", is_admin=True):
            send_to_user(line)
    """

    def __init__(self, listener_service: IdentListenerService) -> None:
        self._listener_service = listener_service
        self._init_logger()

    def handle_command(self, line: str, *, is_admin: bool = False) -> list[str]:
        """Run one command line.

        Args:
            line: Full command text; only the first token is used.
            is_admin: Privileged callers see owners and last request/reply.

        Returns:
            Output lines.
        """
        tokens = line.split()
        command = tokens[0] if tokens else ""
        self._log_operation("handle_command", command=command).debug(
            "ident_admin_command"
        )

        if command.upper() == "HELP":
            return self.help_lines()
        if command.upper() == "STATUS":
            return self.status_lines(is_admin=is_admin)
        return [f"Unknown command [{command}] try 'Help'"]

    def help_lines(self) -> list[str]:
        return render_table(("Command", "Description"), list(COMMANDS))

    def status_lines(self, *, is_admin: bool = False) -> list[str]:
        status = self._listener_service.status()
        lines: list[str] = []

        if status.is_listening:
            lines.append(
                f"IdentServer is listening on: {status.address}:{status.port}"
            )
            if is_admin:
                lines.append("List of active users/networks:")
                lines.extend(f"* {label}" for label in status.owners)
        else:
            if status.listen_failed:
                lines.append(LISTEN_FAILED_WARNING)
            lines.append(NOT_LISTENING)

        if is_admin:
            lines.append(f"Last IDENT request: {status.last_request}")
            lines.append(f"Last IDENT reply: {status.last_reply}")

        return lines

    def login_warning(self) -> list[str]:
        """Warning shown to a user logging in while the bind is failing."""
        if not self._listener_service.listen_failed:
            return []
        return [
            f"*** {LISTEN_FAILED_WARNING}",
            "*** IDENT listener is NOT running.",
        ]
