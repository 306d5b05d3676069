"""Infrastructure layer for identserv: adapters, stubs, monitoring, logging."""
