"""Claim status transitions.

``unclaimed -> pending`` happens only through a claim and ``* -> unclaimed``
only through an unclaim; neither is reachable by a status update.
"""

from shared.models import ClaimStatus

from .errors import InvalidTransition

# Transitions reachable through a status update by the current claimant
STATUS_UPDATE_TRANSITIONS: dict[ClaimStatus, frozenset[ClaimStatus]] = {
    ClaimStatus.UNCLAIMED: frozenset(),
    ClaimStatus.PENDING: frozenset({ClaimStatus.VERIFIED, ClaimStatus.DISPUTED}),
    ClaimStatus.VERIFIED: frozenset({ClaimStatus.DISPUTED}),
    ClaimStatus.DISPUTED: frozenset({ClaimStatus.VERIFIED}),
}


def allowed_targets(current: ClaimStatus | str) -> frozenset[ClaimStatus]:
    return STATUS_UPDATE_TRANSITIONS[ClaimStatus(current)]


def is_transition_allowed(current: ClaimStatus | str, target: ClaimStatus | str) -> bool:
    """Return True if a status update may move ``current`` to ``target``.

    Requesting the current status is always allowed (no-op), except for
    ``unclaimed`` which a status update never touches.
    """
    current, target = ClaimStatus(current), ClaimStatus(target)
    if current == target:
        return current != ClaimStatus.UNCLAIMED
    return target in STATUS_UPDATE_TRANSITIONS[current]


def validate_transition(
    current: ClaimStatus | str, target: ClaimStatus | str, *, resource_id: int | None = None
) -> None:
    """Raise InvalidTransition unless ``current -> target`` is allowed."""
    if not is_transition_allowed(current, target):
        raise InvalidTransition(
            ClaimStatus(current).value, ClaimStatus(target).value, resource_id=resource_id
        )
