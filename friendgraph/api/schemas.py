"""Request and response bodies for the friendship API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from friendgraph.domain.friendship import Friendship


class InitiateRequest(BaseModel):
    initiator_id: str = Field(min_length=1)
    recipient_id: str = Field(min_length=1)


class RespondRequest(BaseModel):
    initiator_id: str = Field(min_length=1)
    recipient_id: str = Field(min_length=1)
    # Matched case-insensitively by the service; bad values are a 400
    status: str


class FriendshipOut(BaseModel):
    initiator_id: str
    recipient_id: str
    status: str
    created_at: datetime

    @classmethod
    def from_domain(cls, friendship: Friendship) -> FriendshipOut:
        return cls(**friendship.to_dict())


class FriendshipMessage(BaseModel):
    """Confirmation returned by initiate and respond."""

    message: str
    friendship: FriendshipOut
