"""Domain models - pure data structures with no external dependencies.

These models represent the core business entities and are shared across services.
"""

from .friendship import Decision, Friendship, FriendshipStatus, InitiateOutcome
from .errors import (
    ErrorCategory,
    FriendGraphError,
    FriendshipNotFoundError,
    FriendshipRejectedError,
    InvalidRequestError,
    InvalidStatusError,
    NoFriendshipsFoundError,
    StoreError,
)

__all__ = [
    # Friendship models
    "Decision",
    "Friendship",
    "FriendshipStatus",
    "InitiateOutcome",
    # Errors
    "ErrorCategory",
    "FriendGraphError",
    "FriendshipNotFoundError",
    "FriendshipRejectedError",
    "InvalidRequestError",
    "InvalidStatusError",
    "NoFriendshipsFoundError",
    "StoreError",
]
