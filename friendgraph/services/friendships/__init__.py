"""Friendship services for request handling and storage."""

from .friendship_repository import FriendshipRepository
from .friendship_service import FriendshipService

__all__ = ["FriendshipRepository", "FriendshipService"]
