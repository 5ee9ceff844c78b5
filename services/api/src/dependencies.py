"""FastAPI dependencies for caller identity and claim services."""

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from shared.models import User

from .claims import ClaimantIdentity, ClaimService, ResourceStore, make_verifier
from .config import Settings, get_settings
from .database import get_async_session


async def get_current_user(
    x_user_id: int = Header(..., alias="X-User-ID"),
    db: AsyncSession = Depends(get_async_session),
) -> User:
    """Get current user from the X-User-ID header set by the auth gateway.

    Raises 422 if header missing, 401 if the user is unknown.
    """
    user = await db.get(User, x_user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"User {x_user_id} not found",
        )
    return user


async def get_identity(user: User = Depends(get_current_user)) -> ClaimantIdentity:
    return ClaimantIdentity(user_id=user.id, github_username=user.github_username)


async def get_claim_service(
    db: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
) -> ClaimService:
    return ClaimService(ResourceStore(db), verifier=make_verifier(settings.github_hosts))
