"""Resource and claim schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from shared.models import ClaimStatus


class ResourceRead(BaseModel):
    """Schema for reading a resource with its claim fields."""

    id: int
    name: str
    repository_url: str | None
    claimed_by: int | None
    claim_status: ClaimStatus
    claimed_at: datetime | None
    notes: str | None
    updated_at: datetime | None = None
    model_config = ConfigDict(from_attributes=True)


class ClaimRequest(BaseModel):
    """Optional body for claiming a resource."""

    notes: str | None = Field(None, max_length=2000, description="Claimant annotation")


class ClaimStatusUpdate(BaseModel):
    """Schema for moving a claim to another moderation status."""

    status: ClaimStatus = Field(description="Target claim status")
    notes: str | None = Field(None, max_length=2000, description="Replace claimant notes")


class ClaimEligibilityRead(BaseModel):
    eligible: bool
    reason: str
    model_config = ConfigDict(from_attributes=True)


class ClaimStatsRead(BaseModel):
    """Catalog-wide claim counters."""

    total: int
    claimed: int
    by_status: dict[str, int] = Field(serialization_alias="byStatus")
    unique_claimers: int = Field(serialization_alias="uniqueClaimers")
    model_config = ConfigDict(from_attributes=True)


class ClaimErrorRead(BaseModel):
    detail: str
    code: str
