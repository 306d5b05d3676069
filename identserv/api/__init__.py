"""HTTP admin surface for identserv."""
