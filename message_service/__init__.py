"""Persisted message service: FastAPI over a single SQL table."""

__version__ = "1.0.0"
