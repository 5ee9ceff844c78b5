"""Resource model with claim fields."""

from datetime import datetime
from enum import Enum

from sqlalchemy import DDL, CheckConstraint, DateTime, ForeignKey, Integer, String, Text, event
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class ClaimStatus(str, Enum):
    """Claim moderation status."""

    UNCLAIMED = "unclaimed"
    PENDING = "pending"  # Claimed, awaiting review
    VERIFIED = "verified"
    DISPUTED = "disputed"


CLAIMED_STATUSES = frozenset({ClaimStatus.PENDING, ClaimStatus.VERIFIED, ClaimStatus.DISPUTED})

CLAIM_CONSISTENCY_CHECK = "(claimed_by IS NULL) = (claim_status = 'unclaimed')"

# Users may be deleted outside this service. The trigger releases their claims
# before the row goes, so ON DELETE SET NULL never leaves a claimed status behind.
RELEASE_CLAIMS_SQL = (
    "UPDATE resources SET claimed_by = NULL, claim_status = 'unclaimed', "
    "claimed_at = NULL, notes = NULL WHERE claimed_by = OLD.id;"
)
RELEASE_CLAIMS_SQLITE = DDL(
    "CREATE TRIGGER release_claims_on_user_delete BEFORE DELETE ON users "
    f"FOR EACH ROW BEGIN {RELEASE_CLAIMS_SQL} END"
)
RELEASE_CLAIMS_PG_FUNCTION = DDL(
    "CREATE OR REPLACE FUNCTION release_claims_on_user_delete() RETURNS trigger AS $$ "
    f"BEGIN {RELEASE_CLAIMS_SQL} RETURN OLD; END; $$ LANGUAGE plpgsql"
)
RELEASE_CLAIMS_PG_TRIGGER = DDL(
    "CREATE TRIGGER release_claims_on_user_delete BEFORE DELETE ON users "
    "FOR EACH ROW EXECUTE FUNCTION release_claims_on_user_delete()"
)


class Resource(Base):
    """Resource model - catalog entry that a repository owner may claim.

    ``claimed_by`` is set exactly when ``claim_status`` is not ``unclaimed``.
    """

    __tablename__ = "resources"
    __table_args__ = (
        CheckConstraint(CLAIM_CONSISTENCY_CHECK, name="ck_resources_claim_consistent"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255))

    # e.g. https://github.com/owner/repo
    repository_url: Mapped[str | None] = mapped_column(String(512), nullable=True)

    claimed_by: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True
    )
    claim_status: Mapped[str] = mapped_column(
        String(20),
        default=ClaimStatus.UNCLAIMED.value,
        server_default=ClaimStatus.UNCLAIMED.value,
        index=True,
    )
    claimed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    @property
    def is_claimed(self) -> bool:
        return self.claimed_by is not None


# resources is created after users, so both tables exist when the trigger is added
event.listen(Resource.__table__, "after_create", RELEASE_CLAIMS_SQLITE.execute_if(dialect="sqlite"))
event.listen(
    Resource.__table__, "after_create", RELEASE_CLAIMS_PG_FUNCTION.execute_if(dialect="postgresql")
)
event.listen(
    Resource.__table__, "after_create", RELEASE_CLAIMS_PG_TRIGGER.execute_if(dialect="postgresql")
)
