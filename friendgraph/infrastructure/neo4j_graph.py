"""Neo4j graph access for users and friendship relationships."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from neo4j import Driver, GraphDatabase

from friendgraph.domain.friendship import FriendshipStatus

# Every mutating query starts here: both users are upserted (or matched) and
# write-locked in ascending id order, so operations on the same pair run one
# after the other inside the store. The caller passes $user_ids sorted and
# de-duplicated.
_UPSERT_AND_LOCK_PAIR = """
UNWIND $user_ids AS user_id
MERGE (u:User {id: user_id})
ON CREATE SET u.createdAt = datetime()
SET u._lock = true
REMOVE u._lock
WITH count(u) AS locked
MATCH (u1:User {id: $initiator_id})
MATCH (u2:User {id: $recipient_id})
"""

_LOCK_EXISTING_PAIR = """
UNWIND $user_ids AS user_id
MATCH (u:User {id: user_id})
SET u._lock = true
REMOVE u._lock
WITH count(u) AS locked
"""

_INITIATE_QUERY = (
    _UPSERT_AND_LOCK_PAIR
    + """
WITH u1, u2,
     CASE
         WHEN u1 = u2 THEN 'SELF_REQUEST'
         WHEN EXISTS { (u1)-[:BLOCKED]->(u2) } THEN 'YOU_BLOCKED'
         WHEN EXISTS { (u2)-[:BLOCKED]->(u1) } THEN 'BLOCKED_BY_THEM'
         WHEN EXISTS { (u1)-[:PENDING]->(u2) } THEN 'REQUEST_ALREADY_SENT'
         WHEN EXISTS { (u2)-[:PENDING]->(u1) } THEN 'REQUEST_ALREADY_RECEIVED'
         WHEN EXISTS { (u1)-[:ACCEPTED]-(u2) } THEN 'ALREADY_FRIENDS'
         ELSE 'SENT'
     END AS outcome
OPTIONAL MATCH (u1)-[declined:DECLINED]-(u2)
WITH u1, u2, outcome, collect(declined) AS declined
FOREACH (rel IN CASE WHEN outcome = 'SENT' THEN declined ELSE [] END |
    DELETE rel
)
FOREACH (_ IN CASE WHEN outcome = 'SENT' THEN [1] ELSE [] END |
    CREATE (u1)-[:PENDING {datetime: datetime()}]->(u2)
)
WITH u1, u2, outcome
OPTIONAL MATCH (u1)-[pending:PENDING]->(u2)
RETURN outcome,
       CASE WHEN outcome = 'SENT' THEN pending.datetime END AS created_at
LIMIT 1
"""
)

# {rel_type} is rendered from FriendshipStatus only, never from request data.
_TRANSITION_TEMPLATE = (
    _LOCK_EXISTING_PAIR
    + """
MATCH (u1:User {id: $initiator_id})-[r:PENDING]->(u2:User {id: $recipient_id})
WITH u1, u2, collect(r) AS pending
FOREACH (rel IN pending | DELETE rel)
CREATE (u1)-[n:{rel_type} {datetime: datetime()}]->(u2)
RETURN type(n) AS status, n.datetime AS created_at
"""
)

_TRANSITION_QUERIES = {
    status: _TRANSITION_TEMPLATE.replace("{rel_type}", status.value)
    for status in (FriendshipStatus.ACCEPTED, FriendshipStatus.DECLINED)
}

_BLOCK_QUERY = (
    _UPSERT_AND_LOCK_PAIR
    + """
OPTIONAL MATCH (u1)-[existing]-(u2)
WITH u1, u2, collect(existing) AS existing
FOREACH (rel IN existing | DELETE rel)
CREATE (u1)-[n:BLOCKED {datetime: datetime()}]->(u2)
RETURN type(n) AS status, n.datetime AS created_at
"""
)

_FRIENDS_QUERY = """
MATCH (:User {id: $user_id})-[:ACCEPTED]-(friend:User)
WHERE friend.id <> $user_id
RETURN DISTINCT friend.id AS friend_id
ORDER BY friend_id
"""


def _pair_params(initiator_id: str, recipient_id: str) -> dict:
    return {
        "initiator_id": initiator_id,
        "recipient_id": recipient_id,
        "user_ids": sorted({initiator_id, recipient_id}),
    }


def _to_native(value: Any) -> Optional[datetime]:
    """Convert a neo4j temporal value to a python datetime."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    return value.to_native()


class Neo4jGraph:
    """Neo4j helper holding the driver and every friendship query."""

    def __init__(
        self,
        uri: str,
        user: str,
        password: str,
        database: Optional[str] = None,
        max_connection_pool_size: int = 50,
        connection_timeout: float = 30.0,
        max_transaction_retry_time: float = 0.0,
    ) -> None:
        self._driver: Driver = GraphDatabase.driver(
            uri,
            auth=(user, password),
            max_connection_pool_size=max_connection_pool_size,
            connection_timeout=connection_timeout,
            max_transaction_retry_time=max_transaction_retry_time,
        )
        self._database = database
        self._ensure_constraints()

    def close(self) -> None:
        self._driver.close()

    def ping(self) -> None:
        """Raise if the server cannot be reached."""
        self._driver.verify_connectivity()

    # ------------------------------------------------------------------
    # Constraint & index setup
    # ------------------------------------------------------------------
    def _ensure_constraints(self) -> None:
        statements = [
            "CREATE CONSTRAINT user_id IF NOT EXISTS FOR (u:User) REQUIRE u.id IS UNIQUE",
        ]
        with self._driver.session(database=self._database) as session:
            for statement in statements:
                session.execute_write(lambda tx, stmt: tx.run(stmt).consume(), statement)

    # ------------------------------------------------------------------
    # Friendship operations
    # ------------------------------------------------------------------
    def initiate_request(
        self, initiator_id: str, recipient_id: str
    ) -> tuple[str, Optional[datetime]]:
        """Check the pair and create a PENDING edge in one write transaction.

        Returns:
            (outcome code, creation time of the new edge or None)
        """
        params = _pair_params(initiator_id, recipient_id)
        with self._driver.session(database=self._database) as session:
            record = session.execute_write(
                lambda tx: tx.run(_INITIATE_QUERY, **params).single()
            )
        if record is None:
            raise RuntimeError("Initiate query returned no rows")
        return record["outcome"], _to_native(record["created_at"])

    def transition_pending(
        self,
        initiator_id: str,
        recipient_id: str,
        status: FriendshipStatus,
    ) -> Optional[datetime]:
        """Replace the PENDING edge initiator -> recipient with one of `status`.

        Returns:
            Creation time of the new edge, or None when no PENDING edge exists.
        """
        query = _TRANSITION_QUERIES.get(status)
        if query is None:
            raise ValueError(f"Cannot transition a pending request to {status.value}")
        params = _pair_params(initiator_id, recipient_id)
        with self._driver.session(database=self._database) as session:
            record = session.execute_write(lambda tx: tx.run(query, **params).single())
        if record is None:
            return None
        return _to_native(record["created_at"])

    def block(self, initiator_id: str, recipient_id: str) -> datetime:
        """Remove every edge between the pair and create BLOCKED initiator -> recipient."""
        params = _pair_params(initiator_id, recipient_id)
        with self._driver.session(database=self._database) as session:
            record = session.execute_write(
                lambda tx: tx.run(_BLOCK_QUERY, **params).single()
            )
        if record is None:
            raise RuntimeError("Block query returned no rows")
        return _to_native(record["created_at"])

    def get_friend_ids(self, user_id: str) -> list[str]:
        with self._driver.session(database=self._database) as session:
            return session.execute_read(
                lambda tx: [
                    record["friend_id"]
                    for record in tx.run(_FRIENDS_QUERY, user_id=user_id)
                ]
            )

    def get_statistics(self) -> dict:
        users_query = """MATCH (u:User) RETURN count(u) AS users"""
        rels_query = """
        MATCH (:User)-[r]->(:User)
        RETURN type(r) AS kind, count(r) AS total
        """
        with self._driver.session(database=self._database) as session:
            users = session.execute_read(
                lambda tx: tx.run(users_query).single()["users"]
            )
            kinds = session.execute_read(
                lambda tx: {
                    record["kind"]: int(record["total"]) for record in tx.run(rels_query)
                }
            )
        return {
            "users": int(users),
            "relationships": {
                status.value: kinds.get(status.value, 0) for status in FriendshipStatus
            },
        }
