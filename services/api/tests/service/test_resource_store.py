"""Service tests for conditional writes in ResourceStore."""

from datetime import datetime, timezone

import pytest
from sqlalchemy import text, update
from sqlalchemy.exc import IntegrityError

from shared.models import ClaimStatus, Resource
from src.claims import ResourceStore


@pytest.mark.asyncio
async def test_try_claim_only_applies_to_unclaimed_rows(
    session_maker, make_user, make_resource
):
    alice = await make_user("alice")
    bob = await make_user("bob")
    resource = await make_resource()
    now = datetime.now(timezone.utc)

    async with session_maker() as session:
        store = ResourceStore(session)
        assert await store.try_claim(resource.id, alice.id, now, notes="mine") is True
        await store.commit()

    async with session_maker() as session:
        store = ResourceStore(session)
        assert await store.try_claim(resource.id, bob.id, now) is False
        await store.rollback()

        stored = await store.get(resource.id)
        assert stored.claimed_by == alice.id
        assert stored.claim_status == ClaimStatus.PENDING.value
        assert stored.claimed_at is not None
        assert stored.notes == "mine"


@pytest.mark.asyncio
async def test_try_claim_unknown_resource(session_maker, make_user):
    alice = await make_user("alice")
    async with session_maker() as session:
        store = ResourceStore(session)
        assert await store.try_claim(999, alice.id, datetime.now(timezone.utc)) is False
        assert await store.get(999) is None


@pytest.mark.asyncio
async def test_try_release_requires_current_claimant(session_maker, make_user, make_resource):
    alice = await make_user("alice")
    bob = await make_user("bob")
    resource = await make_resource()

    async with session_maker() as session:
        store = ResourceStore(session)
        await store.try_claim(resource.id, alice.id, datetime.now(timezone.utc), notes="n")
        await store.commit()

        assert await store.try_release(resource.id, bob.id) is False
        assert await store.try_release(resource.id, alice.id) is True
        await store.commit()

        stored = await store.get(resource.id)
        assert stored.claimed_by is None
        assert stored.claim_status == ClaimStatus.UNCLAIMED.value
        assert stored.claimed_at is None
        assert stored.notes is None


@pytest.mark.asyncio
async def test_try_set_status_keeps_notes_unless_given(session_maker, make_user, make_resource):
    alice = await make_user("alice")
    resource = await make_resource()

    async with session_maker() as session:
        store = ResourceStore(session)
        await store.try_claim(resource.id, alice.id, datetime.now(timezone.utc), notes="first")
        assert await store.try_set_status(resource.id, alice.id, ClaimStatus.VERIFIED) is True
        await store.commit()
        assert (await store.get(resource.id)).notes == "first"

        assert await store.try_set_status(
            resource.id, alice.id, ClaimStatus.DISPUTED, notes="second"
        )
        await store.commit()
        stored = await store.get(resource.id)
        assert stored.claim_status == ClaimStatus.DISPUTED.value
        assert stored.notes == "second"


@pytest.mark.asyncio
async def test_counts_and_release_all(session_maker, make_user, make_resource):
    alice = await make_user("alice")
    bob = await make_user("bob")
    first = await make_resource(name="first")
    second = await make_resource(name="second")
    third = await make_resource(name="third")
    await make_resource(name="fourth")
    now = datetime.now(timezone.utc)

    async with session_maker() as session:
        store = ResourceStore(session)
        await store.try_claim(first.id, alice.id, now)
        await store.try_claim(second.id, alice.id, now)
        await store.try_claim(third.id, bob.id, now)
        await store.try_set_status(third.id, bob.id, ClaimStatus.VERIFIED)
        await store.commit()

        assert await store.count_by_status() == {"unclaimed": 1, "pending": 2, "verified": 1}
        assert await store.count_claimers() == 2  # noqa: PLR2004

        claimed = await store.list_claimed_by(alice.id)
        assert {r.id for r in claimed} == {first.id, second.id}

        assert await store.release_all(alice.id) == 2  # noqa: PLR2004
        await store.commit()

        assert await store.list_claimed_by(alice.id) == []
        assert await store.count_by_status() == {"unclaimed": 3, "verified": 1}


@pytest.mark.asyncio
async def test_deleting_user_directly_releases_their_claims(
    session_maker, make_user, make_resource
):
    alice = await make_user("alice")
    claimed = await make_resource()
    other = await make_resource(name="other")
    now = datetime.now(timezone.utc)

    async with session_maker() as session:
        store = ResourceStore(session)
        await store.try_claim(claimed.id, alice.id, now, notes="mine")
        await store.try_set_status(claimed.id, alice.id, ClaimStatus.VERIFIED)
        await store.commit()

    # Removed by the auth side, bypassing the users router
    async with session_maker() as session:
        await session.execute(text("DELETE FROM users WHERE id = :id"), {"id": alice.id})
        await session.commit()

    async with session_maker() as session:
        store = ResourceStore(session)
        for resource_id in (claimed.id, other.id):
            stored = await store.get(resource_id)
            assert stored.claimed_by is None
            assert stored.claim_status == ClaimStatus.UNCLAIMED.value
            assert stored.claimed_at is None
            assert stored.notes is None
        assert await store.count_by_status() == {"unclaimed": 2}


@pytest.mark.asyncio
async def test_inconsistent_claim_fields_are_rejected(session_maker, make_user, make_resource):
    alice = await make_user("alice")
    resource = await make_resource()

    async with session_maker() as session:
        with pytest.raises(IntegrityError):
            await session.execute(
                update(Resource)
                .where(Resource.id == resource.id)
                .values(claimed_by=alice.id)
                .execution_options(synchronize_session=False)
            )
        await session.rollback()

    async with session_maker() as session:
        with pytest.raises(IntegrityError):
            await session.execute(
                update(Resource)
                .where(Resource.id == resource.id)
                .values(claim_status=ClaimStatus.VERIFIED.value)
                .execution_options(synchronize_session=False)
            )
        await session.rollback()
