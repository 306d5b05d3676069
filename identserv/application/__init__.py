"""Application layer for identserv: ports and services."""
