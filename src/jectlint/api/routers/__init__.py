"""HTTP routers for the jectlint host adapter."""
