"""FastAPI host adapter exposing the lint engine over HTTP."""
