"""Common schemas."""

from .resource import (
    ClaimEligibilityRead,
    ClaimErrorRead,
    ClaimRequest,
    ClaimStatsRead,
    ClaimStatusUpdate,
    ResourceRead,
)
from .user import UserRead, UserUpsert

__all__ = [
    "ClaimEligibilityRead",
    "ClaimErrorRead",
    "ClaimRequest",
    "ClaimStatsRead",
    "ClaimStatusUpdate",
    "ResourceRead",
    "UserRead",
    "UserUpsert",
]
