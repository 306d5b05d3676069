"""API routes for identserv."""
