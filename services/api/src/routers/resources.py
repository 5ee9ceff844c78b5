"""Resources router - claim lifecycle endpoints."""

from fastapi import APIRouter, Body, Depends

from shared.models import Resource

from ..claims import ClaimantIdentity, ClaimService
from ..dependencies import get_claim_service, get_identity
from ..schemas import (
    ClaimEligibilityRead,
    ClaimErrorRead,
    ClaimRequest,
    ClaimStatsRead,
    ClaimStatusUpdate,
    ResourceRead,
)

router = APIRouter(prefix="/resources", tags=["resources"])

_errors = {
    403: {"model": ClaimErrorRead},
    404: {"model": ClaimErrorRead},
    409: {"model": ClaimErrorRead},
    422: {"model": ClaimErrorRead},
}


@router.get("/claims/stats", response_model=ClaimStatsRead)
async def get_claim_stats(service: ClaimService = Depends(get_claim_service)) -> ClaimStatsRead:
    """Catalog-wide claim counters (public)."""
    return ClaimStatsRead.model_validate(await service.stats())


@router.get("/claims/mine", response_model=list[ResourceRead])
async def list_my_claims(
    identity: ClaimantIdentity = Depends(get_identity),
    service: ClaimService = Depends(get_claim_service),
) -> list[Resource]:
    """Resources claimed by the caller, most recently updated first."""
    return await service.claimed_by_user(identity.user_id)


@router.get("/{resource_id}", response_model=ResourceRead, responses={404: _errors[404]})
async def get_resource(
    resource_id: int, service: ClaimService = Depends(get_claim_service)
) -> Resource:
    """Get resource by ID."""
    return await service.get(resource_id)


@router.post("/{resource_id}/claim", response_model=ResourceRead, responses=_errors)
async def claim_resource(
    resource_id: int,
    body: ClaimRequest | None = Body(None),
    identity: ClaimantIdentity = Depends(get_identity),
    service: ClaimService = Depends(get_claim_service),
) -> Resource:
    """Claim a resource whose repository the caller owns on GitHub."""
    notes = body.notes if body else None
    return await service.claim(resource_id, identity, notes=notes)


@router.post("/{resource_id}/unclaim", response_model=ResourceRead, responses=_errors)
async def unclaim_resource(
    resource_id: int,
    identity: ClaimantIdentity = Depends(get_identity),
    service: ClaimService = Depends(get_claim_service),
) -> Resource:
    """Release the caller's claim on a resource."""
    return await service.unclaim(resource_id, identity)


@router.patch("/{resource_id}/claim", response_model=ResourceRead, responses=_errors)
async def update_claim_status(
    resource_id: int,
    update: ClaimStatusUpdate,
    identity: ClaimantIdentity = Depends(get_identity),
    service: ClaimService = Depends(get_claim_service),
) -> Resource:
    """Move the caller's claim to another moderation status."""
    return await service.update_status(resource_id, identity, update.status, notes=update.notes)


@router.get(
    "/{resource_id}/can-claim", response_model=ClaimEligibilityRead, responses={404: _errors[404]}
)
async def can_claim_resource(
    resource_id: int,
    identity: ClaimantIdentity = Depends(get_identity),
    service: ClaimService = Depends(get_claim_service),
) -> ClaimEligibilityRead:
    """Advisory eligibility check; a later claim may still be rejected."""
    return ClaimEligibilityRead.model_validate(await service.can_claim(resource_id, identity))
