"""Infrastructure layer - External service clients."""

from .neo4j_client import Neo4jClient
from .neo4j_graph import Neo4jGraph

__all__ = ["Neo4jClient", "Neo4jGraph"]
