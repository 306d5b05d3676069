"""Domain layer for identserv: value types and error kinds."""
