"""DuckDB to Polars - query results as Polars DataFrames.

Runs a DuckDB query, takes its Arrow record batches and converts them,
column by column and in parallel, into one Polars DataFrame.
"""

__version__ = "0.1.0"

# Public API
from duckdb_polars.api import query_to_df_polars, run_query

# Core classes
from duckdb_polars.core.batch import TableSegment
from duckdb_polars.core.engine import record_batches_to_polars_df

# Exceptions
from duckdb_polars.core.exceptions import (
    DuckDBPolarsError,
    DuckDBQueryError,
    InternalError,
    PolarsConversionError,
    SchemaMismatchError,
)

# Configuration
from duckdb_polars.models.runtime_config import RuntimeConfig

__all__ = [
    # Version
    "__version__",
    # Public API
    "query_to_df_polars",
    "run_query",
    "record_batches_to_polars_df",
    # Core classes
    "TableSegment",
    "RuntimeConfig",
    # Exceptions
    "DuckDBPolarsError",
    "InternalError",
    "SchemaMismatchError",
    "PolarsConversionError",
    "DuckDBQueryError",
]
