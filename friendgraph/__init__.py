"""friendgraph - friendship relationship graph service backed by Neo4j."""

__version__ = "0.1.0"
