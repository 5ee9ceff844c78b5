"""Value types passed across the claim service boundary."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ClaimantIdentity:
    """Verified caller identity supplied by the upstream auth gateway."""

    user_id: int
    github_username: str


@dataclass(frozen=True)
class ClaimEligibility:
    eligible: bool
    reason: str


@dataclass(frozen=True)
class ClaimStats:
    total: int
    claimed: int
    unique_claimers: int
    by_status: dict[str, int] = field(default_factory=dict)
