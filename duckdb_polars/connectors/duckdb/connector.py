"""DuckDB connector for running queries as Arrow record batches."""

import logging
from typing import Any, Optional, Sequence, Union

import duckdb
import pyarrow as pa
from duckdb import DuckDBPyConnection

from duckdb_polars.core.exceptions import DuckDBQueryError

from .config import DuckDBConnectorConfig

logger = logging.getLogger(__name__)

Parameters = Union[Sequence[Any], dict[str, Any]]


class DuckDBConnector:
    """Connector for a DuckDB database.

    Opens the database lazily on first use, or wraps a connection owned by the
    caller. Query results are drained completely into Arrow record batches.
    """

    def __init__(
        self,
        config: Optional[DuckDBConnectorConfig] = None,
        connection: Optional[DuckDBPyConnection] = None,
    ):
        """Initialize DuckDBConnector.

        Args:
            config: DuckDB connector configuration (defaults to an in-memory database)
            connection: Existing connection to use. It is not closed by the connector.
        """
        self._config = config or DuckDBConnectorConfig()
        self._database = self._config.database
        self._rows_per_batch = self._config.rows_per_batch
        self._conn: DuckDBPyConnection | None = connection
        self._owns_connection = connection is None

    def _get_connection(self) -> DuckDBPyConnection:
        """Get or create DuckDB connection."""
        if self._conn is None:
            try:
                self._conn = duckdb.connect(
                    self._database,
                    read_only=self._config.read_only,
                    config=dict(self._config.settings),
                )
            except duckdb.Error as e:
                raise DuckDBQueryError(
                    f"Failed to connect to DuckDB: {e}",
                    context={"database": self._database},
                ) from e
            self._owns_connection = True
        return self._conn

    @property
    def connection(self) -> DuckDBPyConnection:
        """Return the underlying DuckDB connection, opening it if needed."""
        return self._get_connection()

    def close(self) -> None:
        """Close the DuckDB connection if the connector opened it."""
        if self._conn is not None and self._owns_connection:
            self._conn.close()
        self._conn = None

    def __enter__(self) -> "DuckDBConnector":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __del__(self) -> None:
        """Ensure connection is closed on garbage collection."""
        self.close()

    def read_batches(
        self, query: str, parameters: Optional[Parameters] = None
    ) -> list[pa.RecordBatch]:
        """Execute a query and return its result as Arrow record batches.

        Uses DuckDB's native Arrow export. The whole result is materialized
        before returning.

        Args:
            query: SQL query text
            parameters: Optional prepared statement parameters

        Returns:
            Record batches in result order; empty if the query returned no rows

        Raises:
            DuckDBQueryError: If preparing, executing or fetching the query fails
        """
        conn = self._get_connection()
        logger.debug(
            "Executing query",
            extra={"context": {"rows_per_batch": self._rows_per_batch}},
        )

        try:
            if parameters is not None:
                result = conn.execute(query, parameters)
            else:
                result = conn.execute(query)
            reader = result.to_arrow_reader(self._rows_per_batch)
            batches = list(reader)
        except (duckdb.Error, pa.ArrowException) as e:
            raise DuckDBQueryError(
                str(e),
                context={"database": self._database, "query": query},
            ) from e

        logger.debug(
            f"Query returned {len(batches)} batches",
            extra={"context": {"rows": sum(batch.num_rows for batch in batches)}},
        )
        return batches
