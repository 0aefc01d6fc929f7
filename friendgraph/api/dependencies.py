"""FastAPI dependencies."""

from fastapi import Request

from friendgraph.services.friendships import FriendshipService


def get_friendship_service(request: Request) -> FriendshipService:
    """Return the service created at startup."""
    return request.app.state.friendship_service
