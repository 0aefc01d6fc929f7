"""High-level friendship service."""

from __future__ import annotations

from typing import List

from friendgraph.domain.errors import (
    FriendshipNotFoundError,
    FriendshipRejectedError,
    InvalidRequestError,
    InvalidStatusError,
    NoFriendshipsFoundError,
)
from friendgraph.domain.friendship import Decision, Friendship, InitiateOutcome
from friendgraph.services.friendships.friendship_repository import FriendshipRepository
from friendgraph.utils.logging import get_logger

logger = get_logger(__name__)


def _require_id(value: str, field: str) -> str:
    if not isinstance(value, str) or not value:
        raise InvalidRequestError(f"{field} must be a non-empty string", field=field)
    return value


class FriendshipService:
    """Applies the friendship rules on top of the repository.

    Holds no state between calls. Every check-then-write runs as one store
    transaction inside the repository, never as a read here followed by a
    write.
    """

    def __init__(self, repository: FriendshipRepository):
        """Initialize friendship service.

        Args:
            repository: Friendship repository
        """
        self.repository = repository

    def initiate(self, initiator_id: str, recipient_id: str) -> Friendship:
        """Send a friend request.

        Args:
            initiator_id: User sending the request
            recipient_id: User receiving the request

        Returns:
            The new PENDING friendship

        Raises:
            InvalidRequestError: An id is empty
            FriendshipRejectedError: Self request, block, pending request or
                existing friendship between the pair
            StoreError: Neo4j failure
        """
        _require_id(initiator_id, "initiator_id")
        _require_id(recipient_id, "recipient_id")

        outcome, friendship = self.repository.create_request(initiator_id, recipient_id)

        if outcome is not InitiateOutcome.SENT:
            logger.info(
                f"Friend request {initiator_id} -> {recipient_id} rejected: {outcome.name}"
            )
            raise FriendshipRejectedError(outcome)

        return friendship

    def respond(self, initiator_id: str, recipient_id: str, decision: str) -> Friendship:
        """Answer a friend request.

        `blocked` always succeeds and replaces any edge between the pair.
        `accepted` and `declined` need a PENDING edge initiator -> recipient.

        Raises:
            InvalidStatusError: decision is not accepted, declined or blocked
            InvalidRequestError: An id is empty
            FriendshipRejectedError: initiator and recipient are the same user
            FriendshipNotFoundError: No pending request for the pair
            StoreError: Neo4j failure
        """
        try:
            parsed = Decision.parse(decision)
        except ValueError:
            raise InvalidStatusError(decision)

        _require_id(initiator_id, "initiator_id")
        _require_id(recipient_id, "recipient_id")

        if initiator_id == recipient_id:
            raise FriendshipRejectedError(InitiateOutcome.SELF_REQUEST)

        if parsed is Decision.BLOCKED:
            return self.repository.block(initiator_id, recipient_id)

        friendship = self.repository.resolve_request(
            initiator_id, recipient_id, parsed.status
        )
        if friendship is None:
            logger.info(f"No pending request {initiator_id} -> {recipient_id}")
            raise FriendshipNotFoundError(initiator_id, recipient_id)

        return friendship

    def list_friends(self, user_id: str) -> List[str]:
        """Return ids of everyone user_id is friends with.

        An empty result raises NoFriendshipsFoundError; a user without
        friends and an unknown user look the same.
        """
        _require_id(user_id, "user_id")

        friend_ids = self.repository.get_friend_ids(user_id)
        if not friend_ids:
            raise NoFriendshipsFoundError(user_id)
        return friend_ids

    def store_available(self) -> bool:
        return self.repository.is_available()
