"""Neo4jGraph - query parameters, transaction use and result conversion.

The driver is mocked; Cypher semantics are covered by tests/integration.
"""

from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import pytest

from friendgraph.domain.friendship import FriendshipStatus
from friendgraph.infrastructure.neo4j_graph import Neo4jGraph

CREATED = datetime(2024, 3, 1, 8, 0, tzinfo=timezone.utc)


class FakeNeoDateTime:
    """Stands in for neo4j.time.DateTime."""

    def to_native(self):
        return CREATED


@pytest.fixture
def tx():
    return MagicMock()


@pytest.fixture
def session(tx):
    session = MagicMock()
    session.execute_write.side_effect = lambda func, *args: func(tx, *args)
    session.execute_read.side_effect = lambda func, *args: func(tx, *args)
    return session


@pytest.fixture
def driver(session):
    with patch("friendgraph.infrastructure.neo4j_graph.GraphDatabase") as database:
        driver = database.driver.return_value
        driver.session.return_value.__enter__.return_value = session
        yield driver


@pytest.fixture
def graph(driver, tx):
    graph = Neo4jGraph("bolt://localhost:7687", "neo4j", "pw", database="friends")
    tx.run.reset_mock()
    return graph


def _last_params(tx):
    return tx.run.call_args.kwargs


def test_driver_disables_transaction_retries():
    with patch("friendgraph.infrastructure.neo4j_graph.GraphDatabase") as database:
        Neo4jGraph("bolt://x:7687", "u", "p")
    kwargs = database.driver.call_args.kwargs
    assert kwargs["auth"] == ("u", "p")
    assert kwargs["max_transaction_retry_time"] == 0.0


def test_constraint_created_on_connect(driver, session, tx):
    Neo4jGraph("bolt://localhost:7687", "neo4j", "pw")
    statement = tx.run.call_args.args[0]
    assert "CONSTRAINT user_id" in statement
    assert "u.id IS UNIQUE" in statement


def test_sessions_use_configured_database(graph, driver, tx):
    tx.run.return_value = []
    graph.get_friend_ids("alice")
    driver.session.assert_called_with(database="friends")


# ─── initiate_request ───────────────────────────────────────────

def test_initiate_runs_in_one_write_transaction(graph, session, tx):
    tx.run.return_value.single.return_value = {
        "outcome": "SENT",
        "created_at": FakeNeoDateTime(),
    }
    session.execute_write.reset_mock()

    outcome, created_at = graph.initiate_request("bob", "alice")

    assert session.execute_write.call_count == 1
    session.execute_read.assert_not_called()
    assert outcome == "SENT"
    assert created_at == CREATED


def test_initiate_locks_users_in_sorted_order(graph, tx):
    tx.run.return_value.single.return_value = {"outcome": "SENT", "created_at": CREATED}

    graph.initiate_request("zoe", "adam")

    params = _last_params(tx)
    assert params["initiator_id"] == "zoe"
    assert params["recipient_id"] == "adam"
    assert params["user_ids"] == ["adam", "zoe"]


def test_initiate_self_request_locks_one_user(graph, tx):
    tx.run.return_value.single.return_value = {
        "outcome": "SELF_REQUEST",
        "created_at": None,
    }

    outcome, created_at = graph.initiate_request("alice", "alice")

    assert _last_params(tx)["user_ids"] == ["alice"]
    assert outcome == "SELF_REQUEST"
    assert created_at is None


def test_initiate_query_checks_rules_in_priority_order(graph, tx):
    tx.run.return_value.single.return_value = {"outcome": "SENT", "created_at": CREATED}
    graph.initiate_request("a", "b")
    query = tx.run.call_args.args[0]

    order = [
        "'SELF_REQUEST'",
        "'YOU_BLOCKED'",
        "'BLOCKED_BY_THEM'",
        "'REQUEST_ALREADY_SENT'",
        "'REQUEST_ALREADY_RECEIVED'",
        "'ALREADY_FRIENDS'",
        "'SENT'",
    ]
    positions = [query.index(code) for code in order]
    assert positions == sorted(positions)


def test_initiate_without_result_row_raises(graph, tx):
    tx.run.return_value.single.return_value = None
    with pytest.raises(RuntimeError):
        graph.initiate_request("a", "b")


# ─── transition_pending ─────────────────────────────────────────

@pytest.mark.parametrize(
    "status", [FriendshipStatus.ACCEPTED, FriendshipStatus.DECLINED]
)
def test_transition_creates_requested_kind(graph, tx, status):
    tx.run.return_value.single.return_value = {
        "status": status.value,
        "created_at": CREATED,
    }

    created_at = graph.transition_pending("alice", "bob", status)

    query = tx.run.call_args.args[0]
    assert f"[n:{status.value} " in query
    assert "[r:PENDING]" in query
    assert "{rel_type}" not in query
    assert created_at == CREATED


def test_transition_without_pending_edge_returns_none(graph, tx):
    tx.run.return_value.single.return_value = None
    assert graph.transition_pending("alice", "bob", FriendshipStatus.ACCEPTED) is None


@pytest.mark.parametrize(
    "status", [FriendshipStatus.PENDING, FriendshipStatus.BLOCKED]
)
def test_transition_refuses_other_kinds(graph, tx, status):
    with pytest.raises(ValueError):
        graph.transition_pending("alice", "bob", status)
    tx.run.assert_not_called()


# ─── block ──────────────────────────────────────────────────────

def test_block_replaces_edges_in_either_direction(graph, tx):
    tx.run.return_value.single.return_value = {
        "status": "BLOCKED",
        "created_at": FakeNeoDateTime(),
    }

    created_at = graph.block("bob", "alice")

    query = tx.run.call_args.args[0]
    assert "MERGE (u:User {id: user_id})" in query
    assert "OPTIONAL MATCH (u1)-[existing]-(u2)" in query
    assert "CREATE (u1)-[n:BLOCKED" in query
    assert _last_params(tx)["user_ids"] == ["alice", "bob"]
    assert created_at == CREATED


# ─── reads ──────────────────────────────────────────────────────

def test_get_friend_ids_uses_read_transaction(graph, session, tx):
    tx.run.return_value = [{"friend_id": "bob"}, {"friend_id": "carol"}]

    friends = graph.get_friend_ids("alice")

    assert friends == ["bob", "carol"]
    session.execute_read.assert_called_once()
    assert _last_params(tx) == {"user_id": "alice"}


def test_get_statistics_fills_missing_kinds(graph, tx):
    users_result = MagicMock()
    users_result.single.return_value = {"users": 3}
    kinds_result = [{"kind": "ACCEPTED", "total": 2}, {"kind": "PENDING", "total": 1}]
    tx.run.side_effect = [users_result, kinds_result]

    stats = graph.get_statistics()

    assert stats == {
        "users": 3,
        "relationships": {"PENDING": 1, "ACCEPTED": 2, "DECLINED": 0, "BLOCKED": 0},
    }


def test_ping_verifies_connectivity(graph, driver):
    graph.ping()
    driver.verify_connectivity.assert_called_once()
