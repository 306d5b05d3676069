"""Configuration module for identserv.

Available Configurations:
- IdentServerConfig: listener port, bind host, idle timeout, line limit
"""

from identserv.config.ident_config import (
    DEFAULT_IDENT_SERVER_CONFIG,
    TEST_IDENT_SERVER_CONFIG,
    IdentServerConfig,
)

__all__ = [
    "IdentServerConfig",
    "DEFAULT_IDENT_SERVER_CONFIG",
    "TEST_IDENT_SERVER_CONFIG",
]
