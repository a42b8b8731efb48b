"""Book API: a FastAPI service managing a single book resource."""

__version__ = "0.1.0"
