"""Health check router."""

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import get_async_session

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(db: AsyncSession = Depends(get_async_session)) -> dict:
    """Health check endpoint; verifies the store is reachable."""
    await db.execute(text("SELECT 1"))
    return {"status": "ok"}
