"""FastAPI application serving the source adapters."""
