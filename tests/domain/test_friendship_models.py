"""Friendship domain models - status parsing, decisions, outcome messages."""

from datetime import datetime, timezone

import pytest

from friendgraph.domain.friendship import (
    Decision,
    Friendship,
    FriendshipStatus,
    InitiateOutcome,
)


# ─── Decision ────────────────────────────────────────────────────

@pytest.mark.parametrize("raw", ["accepted", "ACCEPTED", "Accepted", "aCcEpTeD"])
def test_decision_parse_is_case_insensitive(raw):
    assert Decision.parse(raw) is Decision.ACCEPTED


@pytest.mark.parametrize("raw", ["accept", "pending", "", " blocked", "blocked ", "decline"])
def test_decision_parse_rejects_anything_else(raw):
    with pytest.raises(ValueError):
        Decision.parse(raw)


def test_decision_parse_rejects_non_strings():
    with pytest.raises(ValueError):
        Decision.parse(None)


def test_decision_maps_to_relationship_kind():
    assert Decision.ACCEPTED.status is FriendshipStatus.ACCEPTED
    assert Decision.DECLINED.status is FriendshipStatus.DECLINED
    assert Decision.BLOCKED.status is FriendshipStatus.BLOCKED


# ─── FriendshipStatus ────────────────────────────────────────────

def test_status_from_string_accepts_relationship_type():
    assert FriendshipStatus.from_string("PENDING") is FriendshipStatus.PENDING
    assert FriendshipStatus.from_string("blocked") is FriendshipStatus.BLOCKED


def test_status_from_string_rejects_unknown_type():
    with pytest.raises(ValueError, match="Invalid friendship status"):
        FriendshipStatus.from_string("FOLLOWS")


def test_status_label_is_lower_case():
    assert FriendshipStatus.ACCEPTED.label == "accepted"


# ─── InitiateOutcome ─────────────────────────────────────────────

def test_only_sent_is_success():
    assert InitiateOutcome.SENT.is_success
    assert not any(o.is_success for o in InitiateOutcome if o is not InitiateOutcome.SENT)


def test_blocked_outcomes_distinguish_direction():
    assert InitiateOutcome.YOU_BLOCKED.message == "You have blocked this user"
    assert InitiateOutcome.BLOCKED_BY_THEM.message == "This user has blocked you"


def test_pending_outcomes_distinguish_direction():
    assert "already sent" in InitiateOutcome.REQUEST_ALREADY_SENT.message
    assert "sent you" in InitiateOutcome.REQUEST_ALREADY_RECEIVED.message


def test_every_outcome_has_a_message():
    for outcome in InitiateOutcome:
        assert outcome.message


# ─── Friendship ──────────────────────────────────────────────────

def test_friendship_normalizes_status_string():
    friendship = Friendship("alice", "bob", "accepted")
    assert friendship.status is FriendshipStatus.ACCEPTED


def test_friendship_rejects_self_relationship():
    with pytest.raises(ValueError, match="itself"):
        Friendship("alice", "alice", FriendshipStatus.PENDING)


def test_friendship_rejects_missing_ids():
    with pytest.raises(ValueError):
        Friendship("", "bob", FriendshipStatus.PENDING)


def test_friendship_to_dict():
    created = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    friendship = Friendship("alice", "bob", FriendshipStatus.PENDING, created)
    assert friendship.to_dict() == {
        "initiator_id": "alice",
        "recipient_id": "bob",
        "status": "pending",
        "created_at": "2024-01-02T03:04:05+00:00",
    }
