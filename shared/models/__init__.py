"""Database models package."""

from .base import Base
from .resource import CLAIMED_STATUSES, ClaimStatus, Resource
from .user import User

__all__ = [
    "Base",
    "CLAIMED_STATUSES",
    "ClaimStatus",
    "Resource",
    "User",
]
