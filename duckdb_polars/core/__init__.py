"""Core module for duckdb_polars package."""

from duckdb_polars.core.assemble import assemble_segments, check_segment_schemas
from duckdb_polars.core.batch import TableSegment
from duckdb_polars.core.convert import (
    column_names_from_batches,
    convert_batch,
    convert_column,
)
from duckdb_polars.core.engine import record_batches_to_polars_df
from duckdb_polars.core.exceptions import (
    DuckDBPolarsError,
    DuckDBQueryError,
    InternalError,
    PolarsConversionError,
    SchemaMismatchError,
)
from duckdb_polars.core.parallel import ParallelMapper
from duckdb_polars.core.type_mapping import (
    DEFAULT_REGISTRY,
    ColumnConverter,
    ConverterRegistry,
)

__all__ = [
    "TableSegment",
    "column_names_from_batches",
    "convert_column",
    "convert_batch",
    "assemble_segments",
    "check_segment_schemas",
    "record_batches_to_polars_df",
    "ParallelMapper",
    "ColumnConverter",
    "ConverterRegistry",
    "DEFAULT_REGISTRY",
    "DuckDBPolarsError",
    "InternalError",
    "SchemaMismatchError",
    "PolarsConversionError",
    "DuckDBQueryError",
]
