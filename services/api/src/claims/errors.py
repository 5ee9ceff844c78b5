"""Claim lifecycle errors.

These are expected business outcomes. The API layer turns them into
responses; they are not logged as failures.
"""

from fastapi import status


class ClaimError(Exception):
    """Base class for claim lifecycle outcomes."""

    code: str = "ClaimError"
    status_code: int = status.HTTP_400_BAD_REQUEST
    default_message: str = "Claim operation rejected"

    def __init__(self, message: str | None = None, *, resource_id: int | None = None):
        self.message = message or self.default_message
        self.resource_id = resource_id
        super().__init__(self.message)


class ResourceNotFound(ClaimError):
    code = "NotFound"
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class AlreadyClaimed(ClaimError):
    code = "AlreadyClaimed"
    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource is already claimed by another user"


class NotOwner(ClaimError):
    code = "NotOwner"
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "You can only claim resources that you own on GitHub"


class Unverifiable(ClaimError):
    code = "Unverifiable"
    status_code = 422
    default_message = "Resource has no usable GitHub repository URL; cannot verify ownership"


class NotClaimer(ClaimError):
    code = "NotClaimer"
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "You can only modify claims you hold"


class InvalidTransition(ClaimError):
    code = "InvalidTransition"
    status_code = status.HTTP_409_CONFLICT
    default_message = "Claim status transition not allowed"

    def __init__(self, current: str, target: str, *, resource_id: int | None = None):
        self.current = current
        self.target = target
        super().__init__(
            f"Cannot move claim status from '{current}' to '{target}'",
            resource_id=resource_id,
        )
