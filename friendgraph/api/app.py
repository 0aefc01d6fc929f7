"""friendgraph API - FastAPI application factory.

Routes are registered explicitly. The Neo4j connection is opened in the
lifespan and closed on shutdown unless a ready service is injected.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from friendgraph import __version__
from friendgraph.api.error_handlers import register_error_handlers
from friendgraph.api.routes import friendships, health
from friendgraph.config import AppConfig
from friendgraph.infrastructure.neo4j_client import Neo4jClient
from friendgraph.services.friendships import FriendshipRepository, FriendshipService
from friendgraph.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)


def create_app(
    config: Optional[AppConfig] = None,
    service: Optional[FriendshipService] = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        config: Application configuration (loaded from the environment when
            omitted and no service is given)
        service: Ready FriendshipService; skips connecting to Neo4j

    Returns:
        Configured FastAPI app
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if service is not None:
            app.state.friendship_service = service
            yield
            return

        app_config = config or AppConfig.from_env()
        configure_logging(app_config.api.log_level, app_config.api.log_file)

        client = Neo4jClient(app_config.neo4j)
        repository = FriendshipRepository(client)
        app.state.friendship_service = FriendshipService(repository)
        logger.info("friendgraph API started")
        try:
            yield
        finally:
            client.close()
            logger.info("friendgraph API shutting down")

    app = FastAPI(title="friendgraph API", version=__version__, lifespan=lifespan)
    if service is not None:
        app.state.friendship_service = service

    app.include_router(health.router)
    app.include_router(friendships.router)

    register_error_handlers(app)
    return app
