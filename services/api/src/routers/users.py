"""Users router."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from shared.models import User

from ..claims import ClaimService
from ..database import get_async_session
from ..dependencies import get_claim_service
from ..schemas import UserRead, UserUpsert

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/upsert", response_model=UserRead)
async def upsert_user(
    user_in: UserUpsert,
    db: AsyncSession = Depends(get_async_session),
) -> User:
    """Create or update user by GitHub username."""
    query = select(User).where(
        func.lower(User.github_username) == user_in.github_username.lower()
    )
    result = await db.execute(query)
    user = result.scalar_one_or_none()

    if user:
        user.github_username = user_in.github_username
        user.display_name = user_in.display_name
        user.last_seen = func.now()
    else:
        user = User(github_username=user_in.github_username, display_name=user_in.display_name)
        db.add(user)

    await db.commit()
    await db.refresh(user)
    return user


@router.get("/{user_id}", response_model=UserRead)
async def get_user(
    user_id: int,
    db: AsyncSession = Depends(get_async_session),
) -> User:
    """Get user by ID."""
    user = await db.get(User, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: int,
    db: AsyncSession = Depends(get_async_session),
    service: ClaimService = Depends(get_claim_service),
) -> None:
    """Delete a user, releasing their claims in the same transaction."""
    user = await db.get(User, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    await service.release_user_claims(user_id)
    await db.delete(user)
    await db.commit()
