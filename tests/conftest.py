"""Root conftest - shared fixtures.

The service and HTTP tests run against a mocked repository; nothing here
opens a Neo4j connection.
"""

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from friendgraph.api.app import create_app
from friendgraph.services.friendships import FriendshipRepository, FriendshipService

CREATED_AT = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)


@pytest.fixture
def repository():
    return MagicMock(spec=FriendshipRepository)


@pytest.fixture
def service(repository):
    return FriendshipService(repository)


@pytest.fixture
def client(service):
    app = create_app(service=service)
    with TestClient(app) as test_client:
        yield test_client
