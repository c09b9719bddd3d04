"""DuckDB connector module."""

from duckdb_polars.connectors.duckdb.config import DuckDBConnectorConfig
from duckdb_polars.connectors.duckdb.connector import DuckDBConnector

__all__ = [
    "DuckDBConnector",
    "DuckDBConnectorConfig",
]
