"""User schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class UserUpsert(BaseModel):
    """Schema for creating or updating a user by GitHub username."""

    github_username: str = Field(min_length=1, max_length=39, description="GitHub login")
    display_name: str | None = Field(None, description="Display name")


class UserRead(BaseModel):
    """Schema for reading a user."""

    id: int
    github_username: str
    display_name: str | None
    created_at: datetime
    last_seen: datetime
    model_config = ConfigDict(from_attributes=True)
