#!/usr/bin/env python3
"""Initialize the Neo4j schema used by friendgraph and print graph statistics."""

from __future__ import annotations

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from neo4j.exceptions import DriverError, Neo4jError

from friendgraph.config import Neo4jConfig
from friendgraph.infrastructure.neo4j_client import Neo4jClient


def main() -> int:
    try:
        config = Neo4jConfig.from_env()
    except ValueError as e:
        print(f"❌ {e}")
        return 1

    client = Neo4jClient(config)
    try:
        print(f"🔗 Connecting to {config.uri}...")
        # Constraints are created when the graph connects
        graph = client.connect()
        print("✓ Constraint 'user_id' is in place")

        stats = graph.get_statistics()
        print("\n" + "=" * 40)
        print(f"👤 Users: {stats['users']}")
        for kind, total in stats["relationships"].items():
            print(f"🔗 {kind:<9} {total}")
        print("=" * 40)
        return 0
    except (Neo4jError, DriverError) as e:
        print(f"❌ Neo4j error: {e}")
        return 1
    finally:
        client.close()


if __name__ == "__main__":
    sys.exit(main())
