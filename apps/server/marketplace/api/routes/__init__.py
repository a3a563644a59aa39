"""API route modules."""

from . import admin
from . import auth

__all__ = ["admin", "auth"]
