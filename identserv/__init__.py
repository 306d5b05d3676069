"""
identserv - RFC 1413 ident responder for a multi-tenant relay

Answers "who owns local-port X connecting to your remote-port Y?" for the
outbound connections a relay opens on behalf of many accounts. The listening
socket exists only while at least one connection attempt needs it.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
