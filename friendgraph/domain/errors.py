"""Error hierarchy for friendgraph.

Every error carries a code, a category and the HTTP status it maps to.
Client errors (validation, business rules, not found) are 4xx and never
retried here; store failures are 500.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from .friendship import InitiateOutcome


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""

    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"


class FriendGraphError(Exception):
    """Base exception for all friendgraph errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to the REST error envelope."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
            }
        }


# Validation errors (400)


class InvalidRequestError(FriendGraphError):
    """Request is malformed before any store access."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, "VALIDATION_ERROR", ErrorCategory.VALIDATION, 400)
        self.field = field


class InvalidStatusError(FriendGraphError):
    """Decision is not one of accepted, declined or blocked."""

    def __init__(self, value: object):
        super().__init__(
            "Invalid friendship status", "INVALID_STATUS", ErrorCategory.VALIDATION, 400
        )
        self.value = value


# Business rule rejections (400 / 404)


class FriendshipRejectedError(FriendGraphError):
    """A friend request was refused by the relationship rules."""

    def __init__(self, outcome: InitiateOutcome):
        super().__init__(
            outcome.message, outcome.name, ErrorCategory.BUSINESS_RULE, 400
        )
        self.outcome = outcome


class FriendshipNotFoundError(FriendGraphError):
    """No pending request exists for the pair."""

    def __init__(self, initiator_id: str, recipient_id: str):
        super().__init__(
            "Friendship request not found",
            "FRIENDSHIP_NOT_FOUND",
            ErrorCategory.RESOURCE_NOT_FOUND,
            404,
        )
        self.initiator_id = initiator_id
        self.recipient_id = recipient_id


class NoFriendshipsFoundError(FriendGraphError):
    """User has no accepted friendships."""

    def __init__(self, user_id: str):
        super().__init__(
            "No friendships found",
            "NO_FRIENDSHIPS_FOUND",
            ErrorCategory.RESOURCE_NOT_FOUND,
            404,
        )
        self.user_id = user_id


# Infrastructure errors (500)


class StoreError(FriendGraphError):
    """The graph store could not complete the operation."""

    def __init__(self, operation: str):
        super().__init__(
            f"Failed to {operation}", "STORE_ERROR", ErrorCategory.DATABASE, 500
        )
        self.operation = operation
