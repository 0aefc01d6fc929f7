"""Repository for friendship storage in Neo4j."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, List, Optional

from neo4j.exceptions import DriverError, Neo4jError

from friendgraph.domain.errors import StoreError
from friendgraph.domain.friendship import Friendship, FriendshipStatus, InitiateOutcome
from friendgraph.infrastructure.neo4j_client import Neo4jClient
from friendgraph.utils.logging import get_logger

logger = get_logger(__name__)


@contextmanager
def _store_errors(operation: str) -> Iterator[None]:
    """Translate driver failures into StoreError."""
    try:
        yield
    except (Neo4jError, DriverError) as exc:
        logger.error(f"Neo4j failure while trying to {operation}: {exc}", exc_info=True)
        raise StoreError(operation) from exc


class FriendshipRepository:
    """Manages friendship storage and retrieval in Neo4j.

    Each method is a single store transaction; nothing is cached between calls.
    """

    def __init__(self, client: Neo4jClient):
        """Initialize friendship repository.

        Args:
            client: Neo4j client (connected on first use)
        """
        self.client = client
        self.graph = client.connect()

    def create_request(
        self, initiator_id: str, recipient_id: str
    ) -> tuple[InitiateOutcome, Optional[Friendship]]:
        """Evaluate and, when allowed, store a PENDING edge initiator -> recipient.

        Args:
            initiator_id: User sending the request
            recipient_id: User receiving the request

        Returns:
            The outcome and, for InitiateOutcome.SENT, the new friendship
        """
        logger.info(f"Creating friend request {initiator_id} -> {recipient_id}")

        with _store_errors("send friend request"):
            code, created_at = self.graph.initiate_request(initiator_id, recipient_id)

        outcome = InitiateOutcome[code]
        if not outcome.is_success:
            return outcome, None

        return outcome, Friendship(
            initiator_id=initiator_id,
            recipient_id=recipient_id,
            status=FriendshipStatus.PENDING,
            created_at=created_at,
        )

    def resolve_request(
        self, initiator_id: str, recipient_id: str, status: FriendshipStatus
    ) -> Optional[Friendship]:
        """Replace the pending request with an ACCEPTED or DECLINED edge.

        Args:
            initiator_id: User who sent the request
            recipient_id: User who received it
            status: FriendshipStatus.ACCEPTED or FriendshipStatus.DECLINED

        Returns:
            The new friendship, or None if there was no pending request
        """
        logger.info(
            f"Resolving friend request {initiator_id} -> {recipient_id} as {status.label}"
        )

        with _store_errors("update friendship status"):
            created_at = self.graph.transition_pending(initiator_id, recipient_id, status)

        if created_at is None:
            return None

        return Friendship(
            initiator_id=initiator_id,
            recipient_id=recipient_id,
            status=status,
            created_at=created_at,
        )

    def block(self, initiator_id: str, recipient_id: str) -> Friendship:
        """Replace whatever lies between the pair with BLOCKED initiator -> recipient."""
        logger.info(f"Blocking {initiator_id} -> {recipient_id}")

        with _store_errors("update friendship status"):
            created_at = self.graph.block(initiator_id, recipient_id)

        return Friendship(
            initiator_id=initiator_id,
            recipient_id=recipient_id,
            status=FriendshipStatus.BLOCKED,
            created_at=created_at,
        )

    def get_friend_ids(self, user_id: str) -> List[str]:
        """Retrieve ids of users with an ACCEPTED edge to user_id, either direction."""
        logger.info(f"Fetching friends of {user_id}")

        with _store_errors("retrieve friendships"):
            return self.graph.get_friend_ids(user_id)

    def is_available(self) -> bool:
        """Check that the store answers a connectivity probe."""
        try:
            self.graph.ping()
        except (Neo4jError, DriverError) as exc:
            logger.warning(f"Neo4j is unavailable: {exc}")
            return False
        return True
