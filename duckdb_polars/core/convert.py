"""Batch converter: Arrow record batches to Polars table segments."""

import logging
from typing import Optional, Sequence

import polars as pl
import pyarrow as pa

from duckdb_polars.core.batch import TableSegment
from duckdb_polars.core.exceptions import InternalError, PolarsConversionError
from duckdb_polars.core.parallel import ParallelMapper
from duckdb_polars.core.type_mapping import DEFAULT_REGISTRY, ConverterRegistry

logger = logging.getLogger(__name__)

# Errors Polars and PyArrow raise while building arrays, series and frames
TARGET_FORMAT_ERRORS = (pl.exceptions.PolarsError, pa.ArrowException)


def column_names_from_batches(batches: Sequence[pa.RecordBatch]) -> tuple[str, ...]:
    """Return the column names of the first batch.

    Every batch of one query result shares this schema, so the names are
    looked up by position for all of them.

    Raises:
        InternalError: If there are no batches
    """
    if len(batches) == 0:
        raise InternalError("No batches to convert")
    return tuple(batches[0].schema.names)


def convert_column(
    index: int,
    array: pa.Array,
    column_names: Sequence[str],
    registry: Optional[ConverterRegistry] = None,
) -> pl.Series:
    """Convert one Arrow column into a named Polars series.

    Args:
        index: Position of the column in its batch
        array: Column data
        column_names: Names shared by all batches, by position
        registry: Converters to use (defaults to the built-in registry)

    Returns:
        Polars series named after position ``index``

    Raises:
        InternalError: If there is no name for ``index`` or a converter fails
            with an error Polars and PyArrow do not raise
        PolarsConversionError: If the column cannot be represented in Polars
    """
    if not 0 <= index < len(column_names):
        raise InternalError(
            f"Column name not found for index {index}",
            context={"column_index": index, "column_count": len(column_names)},
        )
    name = column_names[index]
    registry = registry or DEFAULT_REGISTRY

    try:
        return registry.to_series(name, array)
    except PolarsConversionError as e:
        e.context.update({"column_index": index, "column_name": name})
        raise
    except TARGET_FORMAT_ERRORS as e:
        raise PolarsConversionError(
            str(e),
            context={
                "column_index": index,
                "column_name": name,
                "arrow_type": str(array.type),
            },
        ) from e
    except Exception as e:
        raise InternalError(
            f"Failed to convert column {index}: {e}",
            context={
                "column_index": index,
                "column_name": name,
                "arrow_type": str(array.type),
            },
        ) from e


def convert_batch(
    batch: pa.RecordBatch,
    column_names: Sequence[str],
    batch_index: int = 0,
    mapper: Optional[ParallelMapper] = None,
    registry: Optional[ConverterRegistry] = None,
) -> TableSegment:
    """Convert one record batch into a table segment.

    Columns are converted independently and put back in their original
    positions. The segment is not compared with other segments.

    Args:
        batch: Arrow record batch
        column_names: Names shared by all batches, by position
        batch_index: Position of the batch in the result sequence
        mapper: Parallel mapper for the columns (sequential if None)
        registry: Converters to use (defaults to the built-in registry)

    Returns:
        TableSegment with the batch's columns in order
    """
    names = tuple(column_names)

    def convert(index: int, array: pa.Array) -> pl.Series:
        return convert_column(index, array, names, registry)

    if mapper is None:
        series = [convert(index, array) for index, array in enumerate(batch.columns)]
    else:
        series = mapper.map(convert, batch.columns)

    try:
        frame = pl.DataFrame(series)
    except TARGET_FORMAT_ERRORS as e:
        raise PolarsConversionError(
            f"Failed to build segment: {e}",
            context={"batch_index": batch_index},
        ) from e

    logger.debug(
        f"Converted batch with {frame.height} rows and {frame.width} columns",
        extra={"batch_index": batch_index},
    )
    return TableSegment(frame=frame, column_names=names, batch_index=batch_index)
