"""Query engine connectors."""

from duckdb_polars.connectors.duckdb import DuckDBConnector, DuckDBConnectorConfig

__all__ = [
    "DuckDBConnector",
    "DuckDBConnectorConfig",
]
