"""Health check route."""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from friendgraph.api.dependencies import get_friendship_service
from friendgraph.services.friendships import FriendshipService

router = APIRouter(tags=["health"])


@router.get("/health")
def health_check(service: FriendshipService = Depends(get_friendship_service)):
    """Report whether the graph store is reachable."""
    if service.store_available():
        return {"status": "ok"}
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "unavailable"},
    )
