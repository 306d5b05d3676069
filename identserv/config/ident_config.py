"""Ident listener configuration.

Environment Variables:
- IDENT_PORT: Port the listener binds (default: 11300)
- IDENT_BIND_HOST: Interface to bind, empty for all (default: "")
- IDENT_IDLE_TIMEOUT: Seconds to wait for the request line (default: 10.0)
- IDENT_MAX_LINE_LENGTH: Longest accepted request line in bytes (default: 1024)
- IDENT_BACKLOG: Listen backlog (default: 128)
"""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_IDENT_PORT = 11300


def _get_int_env(key: str, default: int) -> int:
    """Get integer environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set or invalid.

    Returns:
        Parsed integer value or default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_float_env(key: str, default: float) -> float:
    """Get float environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set or invalid.

    Returns:
        Parsed float value or default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


@dataclass(frozen=True)
class IdentServerConfig:
    """Configuration for the shared ident listener.

    Attributes:
        port: Port to listen on. 0 asks the OS for a free port (tests).
        bind_host: Interface to bind. Empty string binds all interfaces.
        idle_timeout_seconds: How long an accepted connection may stay
            silent before it is closed without a reply.
        max_line_length: Upper bound on the request line, in bytes.
            RFC 1413 requests are a dozen bytes.
        backlog: Listen backlog passed to the socket.
    """

    port: int = DEFAULT_IDENT_PORT
    bind_host: str = ""
    idle_timeout_seconds: float = 10.0
    max_line_length: int = 1024
    backlog: int = 128

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if not 0 <= self.port <= 65535:
            raise ValueError(f"port must be within 0-65535, got {self.port}")
        if self.idle_timeout_seconds <= 0:
            raise ValueError(
                "idle_timeout_seconds must be positive, "
                f"got {self.idle_timeout_seconds}"
            )
        if self.max_line_length < 16:
            raise ValueError(
                f"max_line_length must be at least 16, got {self.max_line_length}"
            )
        if self.backlog < 1:
            raise ValueError(f"backlog must be at least 1, got {self.backlog}")

    @classmethod
    def from_environment(cls) -> "IdentServerConfig":
        """Create config from environment variables with defaults."""
        return cls(
            port=_get_int_env("IDENT_PORT", DEFAULT_IDENT_PORT),
            bind_host=os.environ.get("IDENT_BIND_HOST", ""),
            idle_timeout_seconds=_get_float_env("IDENT_IDLE_TIMEOUT", 10.0),
            max_line_length=_get_int_env("IDENT_MAX_LINE_LENGTH", 1024),
            backlog=_get_int_env("IDENT_BACKLOG", 128),
        )


# Default production config
DEFAULT_IDENT_SERVER_CONFIG = IdentServerConfig()

# Loopback, OS-assigned port and a short timeout for tests
TEST_IDENT_SERVER_CONFIG = IdentServerConfig(
    port=0,
    bind_host="127.0.0.1",
    idle_timeout_seconds=0.5,
    max_line_length=64,
)
