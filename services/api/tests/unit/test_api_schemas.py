"""Unit tests for claim errors, schemas and settings."""

from fastapi import status
from pydantic import ValidationError
import pytest

from shared.models import ClaimStatus
from src.claims import (
    AlreadyClaimed,
    ClaimStats,
    InvalidTransition,
    NotClaimer,
    NotOwner,
    ResourceNotFound,
    Unverifiable,
)
from src.config import Settings
from src.schemas import ClaimStatsRead, ClaimStatusUpdate


@pytest.mark.parametrize(
    ("error", "code", "status_code"),
    [
        (ResourceNotFound(), "NotFound", status.HTTP_404_NOT_FOUND),
        (AlreadyClaimed(), "AlreadyClaimed", status.HTTP_409_CONFLICT),
        (NotOwner(), "NotOwner", status.HTTP_403_FORBIDDEN),
        (Unverifiable(), "Unverifiable", 422),
        (NotClaimer(), "NotClaimer", status.HTTP_403_FORBIDDEN),
        (InvalidTransition("verified", "pending"), "InvalidTransition", status.HTTP_409_CONFLICT),
    ],
)
def test_error_codes(error, code, status_code):
    assert error.code == code
    assert error.status_code == status_code
    assert error.message


def test_error_keeps_custom_message():
    error = NotOwner("nope", resource_id=3)
    assert str(error) == "nope"
    assert error.resource_id == 3


def test_stats_schema_serializes_camel_case_counters():
    stats = ClaimStats(
        total=3,
        claimed=2,
        unique_claimers=1,
        by_status={"unclaimed": 1, "pending": 2, "verified": 0, "disputed": 0},
    )
    data = ClaimStatsRead.model_validate(stats).model_dump(by_alias=True)
    assert data == {
        "total": 3,
        "claimed": 2,
        "byStatus": {"unclaimed": 1, "pending": 2, "verified": 0, "disputed": 0},
        "uniqueClaimers": 1,
    }


def test_status_update_rejects_unknown_status():
    assert ClaimStatusUpdate(status="verified").status == ClaimStatus.VERIFIED
    with pytest.raises(ValidationError):
        ClaimStatusUpdate(status="approved")


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///./claims.db")
        monkeypatch.delenv("GITHUB_HOSTS", raising=False)
        monkeypatch.delenv("LOG_LEVEL", raising=False)

        settings = Settings(_env_file=None)

        assert settings.is_sqlite
        assert settings.github_hosts == ["github.com", "www.github.com"]
        assert settings.log_level == "INFO"

    def test_database_url_required(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)
        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_github_hosts_from_env(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://u:p@db:5432/claims")
        monkeypatch.setenv("GITHUB_HOSTS", '["github.example.com"]')

        settings = Settings(_env_file=None)

        assert not settings.is_sqlite
        assert settings.github_hosts == ["github.example.com"]

    def test_invalid_log_level(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite://")
        monkeypatch.setenv("LOG_LEVEL", "chatty")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)
