"""Conversion engine: record batches to one Polars DataFrame."""

import logging
from typing import Iterable, Optional

import polars as pl
import pyarrow as pa

from duckdb_polars.core.assemble import assemble_segments
from duckdb_polars.core.batch import TableSegment
from duckdb_polars.core.convert import column_names_from_batches, convert_batch
from duckdb_polars.core.metrics import ConversionMetrics
from duckdb_polars.core.parallel import ParallelMapper
from duckdb_polars.core.type_mapping import ConverterRegistry
from duckdb_polars.models.runtime_config import RuntimeConfig

logger = logging.getLogger(__name__)


def record_batches_to_polars_df(
    batches: Iterable[pa.RecordBatch],
    config: Optional[RuntimeConfig] = None,
    registry: Optional[ConverterRegistry] = None,
) -> pl.DataFrame:
    """Convert the record batches of one query result into a DataFrame.

    Conversion steps:
    1. Take the column names from the first batch
    2. Convert every batch to a segment, batches and columns in parallel
    3. Concatenate the segments in batch order

    Args:
        batches: Record batches of one query result, all with the same schema
        config: Runtime configuration (defaults to RuntimeConfig())
        registry: Column converters (defaults to the built-in registry)

    Returns:
        DataFrame whose rows are the batches' rows in order

    Raises:
        InternalError: If there are no batches or a name lookup fails
        SchemaMismatchError: If schema validation is enabled and fails
        PolarsConversionError: If Polars cannot represent a column or build the table
    """
    config = config or RuntimeConfig()
    batch_list = list(batches)
    column_names = column_names_from_batches(batch_list)
    metrics = ConversionMetrics()

    logger.debug(
        f"Converting {len(batch_list)} batches with {len(column_names)} columns",
        extra={"context": {"parallelism": config.parallelism}},
    )

    with ParallelMapper(
        config.parallelism, thread_name_prefix="duckdb_polars-batch"
    ) as batch_mapper, ParallelMapper(
        config.parallelism, thread_name_prefix="duckdb_polars-column"
    ) as column_mapper:

        def convert(index: int, batch: pa.RecordBatch) -> TableSegment:
            return convert_batch(
                batch,
                column_names,
                batch_index=index,
                mapper=column_mapper,
                registry=registry,
            )

        segments = batch_mapper.map(convert, batch_list)

    # Release the consumed batches
    batch_list.clear()

    for segment in segments:
        metrics.record_segment(segment.row_count, segment.column_count)

    frame = assemble_segments(
        segments, validate_schema=config.validate_schema, rechunk=config.rechunk
    )
    metrics.finish()

    logger.debug("Conversion finished", extra={"context": metrics.to_dict()})
    return frame
