#!/usr/bin/env python3
"""Run the friendgraph HTTP API with uvicorn."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import uvicorn

from friendgraph.config import ApiConfig


def main() -> None:
    defaults = ApiConfig.from_env()

    parser = argparse.ArgumentParser(description="Run the friendgraph API server")
    parser.add_argument("--host", default=defaults.host, help="Bind address")
    parser.add_argument("--port", type=int, default=defaults.port, help="Bind port")
    parser.add_argument(
        "--reload", action="store_true", help="Restart on code changes (development)"
    )
    args = parser.parse_args()

    uvicorn.run(
        "friendgraph.api.app:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=defaults.log_level.lower(),
    )


if __name__ == "__main__":
    main()
