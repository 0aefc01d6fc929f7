"""Data models for friendship relationships between users."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class FriendshipStatus(Enum):
    """Kinds of relationship edge stored between two users.

    The value is the relationship type used in the graph.
    """

    PENDING = "PENDING"  # request sent, not yet answered
    ACCEPTED = "ACCEPTED"  # mutual friendship, read in both directions
    DECLINED = "DECLINED"  # request refused
    BLOCKED = "BLOCKED"  # unilateral, replaces any other edge

    @classmethod
    def from_string(cls, value: str) -> FriendshipStatus:
        """Convert a stored relationship type to FriendshipStatus."""
        try:
            return cls(value.upper())
        except ValueError:
            raise ValueError(f"Invalid friendship status: {value}")

    @property
    def label(self) -> str:
        """Lower-case name used in API payloads."""
        return self.value.lower()


class Decision(Enum):
    """Answer a recipient may give to a pending request."""

    ACCEPTED = "accepted"
    DECLINED = "declined"
    BLOCKED = "blocked"

    @classmethod
    def parse(cls, value: str) -> Decision:
        """Match a decision case-insensitively; anything else is rejected."""
        if not isinstance(value, str):
            raise ValueError(f"Invalid decision: {value!r}")
        try:
            return cls(value.lower())
        except ValueError:
            raise ValueError(f"Invalid decision: {value!r}")

    @property
    def status(self) -> FriendshipStatus:
        """Relationship kind this decision produces."""
        return FriendshipStatus[self.name]


class InitiateOutcome(Enum):
    """Result of evaluating a new friend request, in priority order."""

    SELF_REQUEST = "self_request"
    YOU_BLOCKED = "you_blocked"
    BLOCKED_BY_THEM = "blocked_by_them"
    REQUEST_ALREADY_SENT = "request_already_sent"
    REQUEST_ALREADY_RECEIVED = "request_already_received"
    ALREADY_FRIENDS = "already_friends"
    SENT = "sent"

    @property
    def message(self) -> str:
        """Human readable reason returned to the caller."""
        return _OUTCOME_MESSAGES[self]

    @property
    def is_success(self) -> bool:
        return self is InitiateOutcome.SENT


_OUTCOME_MESSAGES = {
    InitiateOutcome.SELF_REQUEST: "You cannot send a friend request to yourself",
    InitiateOutcome.YOU_BLOCKED: "You have blocked this user",
    InitiateOutcome.BLOCKED_BY_THEM: "This user has blocked you",
    InitiateOutcome.REQUEST_ALREADY_SENT: "You have already sent a friend request to this user",
    InitiateOutcome.REQUEST_ALREADY_RECEIVED: "This user has already sent you a friend request",
    InitiateOutcome.ALREADY_FRIENDS: "You are already friends with this user",
    InitiateOutcome.SENT: "Friend request sent",
}


@dataclass(slots=True)
class Friendship:
    """A directed relationship edge: initiator -> recipient.

    ACCEPTED edges are still stored once, in the direction of the
    original request.
    """

    initiator_id: str
    recipient_id: str
    status: FriendshipStatus
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self):
        """Validate and normalize after initialization."""
        if isinstance(self.status, str):
            self.status = FriendshipStatus.from_string(self.status)

        if not self.initiator_id or not self.recipient_id:
            raise ValueError("Friendship requires both user ids")

        # No edge from a user to itself
        if self.initiator_id == self.recipient_id:
            raise ValueError(
                f"Friendship cannot point from a user to itself: {self.initiator_id}"
            )

    def to_dict(self) -> dict:
        return {
            "initiator_id": self.initiator_id,
            "recipient_id": self.recipient_id,
            "status": self.status.label,
            "created_at": self.created_at.isoformat(),
        }
