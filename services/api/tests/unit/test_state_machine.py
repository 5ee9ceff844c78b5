"""Unit tests for claim status transitions."""

import pytest

from shared.models import ClaimStatus
from src.claims.errors import InvalidTransition
from src.claims.state_machine import allowed_targets, is_transition_allowed, validate_transition

P, V, D, U = (
    ClaimStatus.PENDING,
    ClaimStatus.VERIFIED,
    ClaimStatus.DISPUTED,
    ClaimStatus.UNCLAIMED,
)


@pytest.mark.parametrize(
    ("current", "target"),
    [(P, V), (P, D), (V, D), (D, V), (P, P), (V, V), (D, D)],
)
def test_allowed_transitions(current, target):
    assert is_transition_allowed(current, target)
    validate_transition(current, target)


@pytest.mark.parametrize(
    ("current", "target"),
    [
        # Reviewed claims never regress to pending
        (V, P),
        (D, P),
        # unclaimed is only reachable through unclaim
        (P, U),
        (V, U),
        (D, U),
        # pending is only reachable through claim
        (U, P),
        (U, V),
        (U, D),
        (U, U),
    ],
)
def test_disallowed_transitions(current, target):
    assert not is_transition_allowed(current, target)
    with pytest.raises(InvalidTransition) as exc_info:
        validate_transition(current, target, resource_id=7)

    assert exc_info.value.current == current.value
    assert exc_info.value.target == target.value
    assert exc_info.value.resource_id == 7


def test_accepts_plain_strings():
    assert is_transition_allowed("pending", "verified")
    assert not is_transition_allowed("verified", "pending")


def test_allowed_targets():
    assert allowed_targets(P) == {V, D}
    assert allowed_targets("verified") == {D}
    assert allowed_targets(D) == {V}
    assert allowed_targets(U) == frozenset()


def test_unknown_status_rejected():
    with pytest.raises(ValueError):
        is_transition_allowed("pending", "approved")
