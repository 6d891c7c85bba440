"""FastAPI-facing helpers that live with the domain package."""
