"""Domain errors for identserv.

Provides specific exception classes for different failure scenarios.
All exceptions inherit from IdentServError.
"""

from identserv.domain.errors.ident import (
    IdentProtocolError,
    InvalidPortError,
    ListenerBindError,
)

__all__: list[str] = ["IdentProtocolError", "InvalidPortError", "ListenerBindError"]
