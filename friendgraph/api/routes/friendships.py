"""Friendship routes - send, answer and list friend requests."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends

from friendgraph.api.dependencies import get_friendship_service
from friendgraph.api.schemas import (
    FriendshipMessage,
    FriendshipOut,
    InitiateRequest,
    RespondRequest,
)
from friendgraph.domain.friendship import InitiateOutcome
from friendgraph.services.friendships import FriendshipService

router = APIRouter(prefix="/friendships", tags=["friendships"])


# Handlers are plain functions: FastAPI runs them on its threadpool, so
# concurrent requests share the driver's connection pool.


@router.post("/initiate", response_model=FriendshipMessage)
def initiate_friendship(
    body: InitiateRequest,
    service: FriendshipService = Depends(get_friendship_service),
):
    """Send a friend request from initiator to recipient."""
    friendship = service.initiate(body.initiator_id, body.recipient_id)
    return FriendshipMessage(
        message=InitiateOutcome.SENT.message,
        friendship=FriendshipOut.from_domain(friendship),
    )


@router.put("/respond", response_model=FriendshipMessage)
def respond_to_friendship(
    body: RespondRequest,
    service: FriendshipService = Depends(get_friendship_service),
):
    """Accept, decline or block."""
    friendship = service.respond(body.initiator_id, body.recipient_id, body.status)
    return FriendshipMessage(
        message=f"Friendship {friendship.status.label}",
        friendship=FriendshipOut.from_domain(friendship),
    )


@router.get("/{user_id}", response_model=List[str])
def list_friendships(
    user_id: str,
    service: FriendshipService = Depends(get_friendship_service),
):
    return service.list_friends(user_id)
