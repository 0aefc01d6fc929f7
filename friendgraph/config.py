"""Centralized configuration management for friendgraph.

All environment variables and configuration settings are managed here.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}")


@dataclass
class Neo4jConfig:
    """Neo4j graph database configuration."""

    uri: str
    user: str
    password: str
    database: Optional[str] = None
    max_connection_pool_size: int = 50
    connection_timeout: float = 30.0
    # Transient failures are reported to the caller, never retried by the driver
    max_transaction_retry_time: float = 0.0

    @classmethod
    def from_env(cls) -> Neo4jConfig:
        """Load configuration from environment variables."""
        uri = os.getenv("NEO4J_URI")
        user = os.getenv("NEO4J_USERNAME") or os.getenv("NEO4J_USER")
        password = os.getenv("NEO4J_PASSWORD")
        database = os.getenv("NEO4J_DATABASE") or None

        if not all([uri, user, password]):
            raise ValueError(
                "Missing Neo4j credentials. Set NEO4J_URI, NEO4J_USERNAME, and NEO4J_PASSWORD"
            )

        return cls(
            uri=uri,
            user=user,
            password=password,
            database=database,
            max_connection_pool_size=_int_env("NEO4J_MAX_POOL_SIZE", 50),
            connection_timeout=_float_env("NEO4J_CONNECTION_TIMEOUT", 30.0),
        )


@dataclass
class ApiConfig:
    """HTTP server and logging configuration."""

    host: str = "127.0.0.1"
    port: int = 8080
    log_level: str = "INFO"
    log_file: Optional[Path] = None

    def __post_init__(self):
        """Normalize level name and log path."""
        self.log_level = self.log_level.upper()
        if self.log_file is not None:
            self.log_file = Path(self.log_file)

    @classmethod
    def from_env(cls) -> ApiConfig:
        """Load configuration from environment variables."""
        return cls(
            host=os.getenv("API_HOST", "127.0.0.1"),
            port=_int_env("API_PORT", 8080),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_file=os.getenv("LOG_FILE") or None,
        )


@dataclass
class AppConfig:
    """Main application configuration combining all sub-configs."""

    neo4j: Neo4jConfig
    api: ApiConfig

    @classmethod
    def from_env(cls) -> AppConfig:
        """Load complete configuration from environment variables."""
        return cls(
            neo4j=Neo4jConfig.from_env(),
            api=ApiConfig.from_env(),
        )
