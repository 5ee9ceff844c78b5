"""Claim lifecycle orchestration.

ClaimService validates a request against the current row, then commits it
with a conditional write that re-checks the claim precondition at commit
time. Rejections raise ``ClaimError`` subclasses; storage errors propagate
unchanged.
"""

from collections.abc import Callable
from datetime import datetime, timezone

import structlog

from shared.models import ClaimStatus, Resource

from .errors import AlreadyClaimed, ClaimError, NotClaimer, NotOwner, ResourceNotFound, Unverifiable
from .models import ClaimantIdentity, ClaimEligibility, ClaimStats
from .ownership import OwnershipVerdict, OwnershipVerifier, verify_ownership
from .state_machine import validate_transition
from .store import ResourceStore

logger = structlog.get_logger(__name__)

# can_claim reasons
REASON_ELIGIBLE = "eligible"
REASON_ALREADY_CLAIMED = "already_claimed"
REASON_NOT_OWNER = "not_owner"
REASON_UNVERIFIABLE = "unverifiable"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ClaimService:
    """Claim, unclaim and moderate resources for a verified identity."""

    def __init__(
        self,
        store: ResourceStore,
        verifier: OwnershipVerifier = verify_ownership,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.store = store
        self.verifier = verifier
        self.clock = clock

    async def get(self, resource_id: int) -> Resource:
        resource = await self.store.get(resource_id)
        if resource is None:
            await self._reject(ResourceNotFound(resource_id=resource_id))
        return resource

    async def claim(
        self, resource_id: int, identity: ClaimantIdentity, notes: str | None = None
    ) -> Resource:
        """Claim a resource for its verified repository owner.

        Raises:
            ResourceNotFound, AlreadyClaimed, Unverifiable, NotOwner
        """
        resource = await self.get(resource_id)
        if resource.claimed_by is not None:
            await self._reject(AlreadyClaimed(resource_id=resource_id), identity)

        error = self._ownership_error(resource, identity)
        if error is not None:
            await self._reject(error, identity)

        if not await self.store.try_claim(resource_id, identity.user_id, self.clock(), notes):
            # Another request committed a claim after our read
            await self._reject(AlreadyClaimed(resource_id=resource_id), identity)

        await self.store.commit()
        logger.info(
            "resource_claimed",
            resource_id=resource_id,
            user_id=identity.user_id,
            github_username=identity.github_username,
        )
        return await self.get(resource_id)

    async def unclaim(self, resource_id: int, identity: ClaimantIdentity) -> Resource:
        """Release a claim held by ``identity``.

        Raises:
            ResourceNotFound, NotClaimer
        """
        await self.get(resource_id)
        if not await self.store.try_release(resource_id, identity.user_id):
            await self._reject(NotClaimer(resource_id=resource_id), identity)

        await self.store.commit()
        logger.info("resource_unclaimed", resource_id=resource_id, user_id=identity.user_id)
        return await self.get(resource_id)

    async def update_status(
        self,
        resource_id: int,
        identity: ClaimantIdentity,
        new_status: ClaimStatus | str,
        notes: str | None = None,
    ) -> Resource:
        """Move a claim through the moderation states.

        Raises:
            ResourceNotFound, NotClaimer, InvalidTransition
        """
        new_status = ClaimStatus(new_status)
        resource = await self.get(resource_id)
        if resource.claimed_by != identity.user_id:
            await self._reject(NotClaimer(resource_id=resource_id), identity)

        current = resource.claim_status
        try:
            validate_transition(current, new_status, resource_id=resource_id)
        except ClaimError as e:
            await self._reject(e, identity)

        if new_status == ClaimStatus(current) and notes is None:
            return resource

        if not await self.store.try_set_status(resource_id, identity.user_id, new_status, notes):
            # Claim released between the read and the write
            await self._reject(NotClaimer(resource_id=resource_id), identity)

        await self.store.commit()
        logger.info(
            "claim_status_updated",
            resource_id=resource_id,
            user_id=identity.user_id,
            from_status=current,
            to_status=new_status.value,
        )
        return await self.get(resource_id)

    async def can_claim(self, resource_id: int, identity: ClaimantIdentity) -> ClaimEligibility:
        """Advisory check replaying claim's validation without writing.

        Raises ResourceNotFound; every other outcome is reported as a reason.
        """
        resource = await self.get(resource_id)
        if resource.claimed_by is not None:
            return ClaimEligibility(eligible=False, reason=REASON_ALREADY_CLAIMED)

        error = self._ownership_error(resource, identity)
        if isinstance(error, NotOwner):
            return ClaimEligibility(eligible=False, reason=REASON_NOT_OWNER)
        if isinstance(error, Unverifiable):
            return ClaimEligibility(eligible=False, reason=REASON_UNVERIFIABLE)
        return ClaimEligibility(eligible=True, reason=REASON_ELIGIBLE)

    async def claimed_by_user(self, user_id: int) -> list[Resource]:
        return await self.store.list_claimed_by(user_id)

    async def stats(self) -> ClaimStats:
        counts = await self.store.count_by_status()
        by_status = {s.value: counts.get(s.value, 0) for s in ClaimStatus}
        total = sum(counts.values())
        return ClaimStats(
            total=total,
            claimed=total - by_status[ClaimStatus.UNCLAIMED.value],
            unique_claimers=await self.store.count_claimers(),
            by_status=by_status,
        )

    async def release_user_claims(self, user_id: int) -> int:
        """Clear every claim held by ``user_id`` without committing.

        The caller commits together with whatever removes the user.
        """
        released = await self.store.release_all(user_id)
        logger.info("user_claims_released", user_id=user_id, released=released)
        return released

    def _ownership_error(
        self, resource: Resource, identity: ClaimantIdentity
    ) -> ClaimError | None:
        if not resource.repository_url:
            return Unverifiable(resource_id=resource.id)

        verdict = self.verifier(resource.repository_url, identity.github_username)
        if verdict == OwnershipVerdict.NOT_OWNER:
            return NotOwner(resource_id=resource.id)
        if verdict == OwnershipVerdict.UNVERIFIABLE:
            return Unverifiable(resource_id=resource.id)
        return None

    async def _reject(self, error: ClaimError, identity: ClaimantIdentity | None = None):
        await self.store.rollback()
        logger.info(
            "claim_rejected",
            code=error.code,
            resource_id=error.resource_id,
            user_id=identity.user_id if identity else None,
        )
        raise error
