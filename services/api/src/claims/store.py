"""Resource persistence for the claim lifecycle.

Every mutation is a single conditional UPDATE whose WHERE clause carries the
precondition it depends on, so concurrent writers cannot both succeed. No
state is cached between requests.
"""

from datetime import datetime

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from shared.models import ClaimStatus, Resource


class ResourceStore:
    """Claim-field access to the ``resources`` table over one session."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, resource_id: int) -> Resource | None:
        # populate_existing: never serve a row from the identity map
        return await self.session.get(Resource, resource_id, populate_existing=True)

    async def try_claim(
        self,
        resource_id: int,
        user_id: int,
        claimed_at: datetime,
        notes: str | None = None,
    ) -> bool:
        """Set the claimant only if the resource is currently unclaimed."""
        stmt = (
            update(Resource)
            .where(Resource.id == resource_id, Resource.claimed_by.is_(None))
            .values(
                claimed_by=user_id,
                claim_status=ClaimStatus.PENDING.value,
                claimed_at=claimed_at,
                notes=notes,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    async def try_release(self, resource_id: int, user_id: int) -> bool:
        """Clear the claim only if ``user_id`` currently holds it."""
        stmt = (
            update(Resource)
            .where(Resource.id == resource_id, Resource.claimed_by == user_id)
            .values(
                claimed_by=None,
                claim_status=ClaimStatus.UNCLAIMED.value,
                claimed_at=None,
                notes=None,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    async def try_set_status(
        self,
        resource_id: int,
        user_id: int,
        claim_status: ClaimStatus,
        notes: str | None = None,
    ) -> bool:
        """Update status (and notes when given) while ``user_id`` holds the claim."""
        values: dict = {"claim_status": claim_status.value}
        if notes is not None:
            values["notes"] = notes
        stmt = (
            update(Resource)
            .where(Resource.id == resource_id, Resource.claimed_by == user_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    async def release_all(self, user_id: int) -> int:
        """Clear every claim held by ``user_id``; returns the number released."""
        stmt = (
            update(Resource)
            .where(Resource.claimed_by == user_id)
            .values(
                claimed_by=None,
                claim_status=ClaimStatus.UNCLAIMED.value,
                claimed_at=None,
                notes=None,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount

    async def list_claimed_by(self, user_id: int) -> list[Resource]:
        query = (
            select(Resource)
            .where(Resource.claimed_by == user_id)
            .order_by(Resource.updated_at.desc(), Resource.id.desc())
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def count_by_status(self) -> dict[str, int]:
        query = select(Resource.claim_status, func.count()).group_by(Resource.claim_status)
        result = await self.session.execute(query)
        return {row[0]: row[1] for row in result.all()}

    async def count_claimers(self) -> int:
        query = select(func.count(func.distinct(Resource.claimed_by)))
        result = await self.session.execute(query)
        return result.scalar_one()

    async def commit(self) -> None:
        await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()
