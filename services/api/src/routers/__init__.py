"""Routers package."""

from . import health, resources, users

__all__ = [
    "health",
    "resources",
    "users",
]
