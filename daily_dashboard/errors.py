"""Exceptions shared by the stores and the API layer."""
from __future__ import annotations


class ValidationError(ValueError):
    """Raised when a create/update request is rejected before it is merged."""
