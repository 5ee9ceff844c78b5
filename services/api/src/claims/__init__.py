"""Resource claim lifecycle."""

from .errors import (
    AlreadyClaimed,
    ClaimError,
    InvalidTransition,
    NotClaimer,
    NotOwner,
    ResourceNotFound,
    Unverifiable,
)
from .models import ClaimantIdentity, ClaimEligibility, ClaimStats
from .ownership import OwnershipVerdict, RepositoryRef, make_verifier, parse_repository, verify_ownership
from .service import ClaimService
from .state_machine import allowed_targets, is_transition_allowed, validate_transition
from .store import ResourceStore

__all__ = [
    "AlreadyClaimed",
    "ClaimError",
    "ClaimEligibility",
    "ClaimService",
    "ClaimStats",
    "ClaimantIdentity",
    "InvalidTransition",
    "NotClaimer",
    "NotOwner",
    "OwnershipVerdict",
    "RepositoryRef",
    "ResourceNotFound",
    "ResourceStore",
    "Unverifiable",
    "allowed_targets",
    "is_transition_allowed",
    "make_verifier",
    "parse_repository",
    "validate_transition",
    "verify_ownership",
]
