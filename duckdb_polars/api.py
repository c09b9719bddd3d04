"""Public Python API for duckdb_polars.

This module provides the main entry points for running DuckDB queries into
Polars DataFrames.
"""

from typing import Optional

import polars as pl
from duckdb import DuckDBPyConnection

from duckdb_polars.connectors.duckdb import DuckDBConnector, DuckDBConnectorConfig
from duckdb_polars.connectors.duckdb.connector import Parameters
from duckdb_polars.core.engine import record_batches_to_polars_df
from duckdb_polars.models.runtime_config import RuntimeConfig


def query_to_df_polars(
    conn: DuckDBPyConnection,
    query: str,
    parameters: Optional[Parameters] = None,
    config: Optional[RuntimeConfig] = None,
    rows_per_batch: Optional[int] = None,
) -> pl.DataFrame:
    """Run a query on an open DuckDB connection and return a DataFrame.

    The connection stays open and owned by the caller.

    Args:
        conn: DuckDB connection
        query: SQL query text
        parameters: Optional prepared statement parameters
        config: Conversion configuration
        rows_per_batch: Maximum rows per Arrow batch fetched from DuckDB

    Returns:
        Polars DataFrame with the query result

    Raises:
        DuckDBQueryError: If DuckDB fails to run the query
        InternalError: If the query produced no batches
        PolarsConversionError: If a column cannot be represented in Polars

    Example:
        >>> import duckdb
        >>> conn = duckdb.connect()
        >>> query_to_df_polars(conn, "SELECT 1 AS a, 2 AS b").to_dicts()
        [{'a': 1, 'b': 2}]
    """
    connector_config = (
        DuckDBConnectorConfig(rows_per_batch=rows_per_batch)
        if rows_per_batch is not None
        else None
    )
    connector = DuckDBConnector(connector_config, connection=conn)
    batches = connector.read_batches(query, parameters)
    return record_batches_to_polars_df(batches, config)


def run_query(
    query: str,
    database: str = ":memory:",
    parameters: Optional[Parameters] = None,
    config: Optional[RuntimeConfig] = None,
) -> pl.DataFrame:
    """Open a database, run a query into a DataFrame and close the database.

    Args:
        query: SQL query text
        database: Database file path or ':memory:'
        parameters: Optional prepared statement parameters
        config: Conversion configuration

    Returns:
        Polars DataFrame with the query result

    Example:
        >>> run_query("SELECT 42 AS answer").item()
        42
    """
    with DuckDBConnector(DuckDBConnectorConfig(database=database)) as connector:
        batches = connector.read_batches(query, parameters)
    return record_batches_to_polars_df(batches, config)
