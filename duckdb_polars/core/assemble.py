"""Table assembler: stack converted segments into one DataFrame."""

import logging
from typing import Sequence

import polars as pl

from duckdb_polars.core.batch import TableSegment
from duckdb_polars.core.exceptions import (
    InternalError,
    PolarsConversionError,
    SchemaMismatchError,
)

logger = logging.getLogger(__name__)


def check_segment_schemas(segments: Sequence[TableSegment]) -> None:
    """Verify every segment has the column names and types of the first.

    Raises:
        SchemaMismatchError: For the first segment that differs
    """
    first = segments[0]
    for segment in segments[1:]:
        if segment.column_names != first.column_names:
            raise SchemaMismatchError(
                f"Segment {segment.batch_index} column names differ from the first segment",
                context={
                    "segment_index": segment.batch_index,
                    "expected": list(first.column_names),
                    "actual": list(segment.column_names),
                },
            )
        if segment.schema != first.schema:
            raise SchemaMismatchError(
                f"Segment {segment.batch_index} column types differ from the first segment",
                context={
                    "segment_index": segment.batch_index,
                    "expected": dict(first.schema),
                    "actual": dict(segment.schema),
                },
            )


def assemble_segments(
    segments: Sequence[TableSegment],
    validate_schema: bool = False,
    rechunk: bool = False,
) -> pl.DataFrame:
    """Concatenate segments vertically, in order.

    All segments are expected to share one schema; it is only checked when
    ``validate_schema`` is set. Rows are neither sorted nor deduplicated.

    Args:
        segments: Converted segments in batch order
        validate_schema: Compare every segment's schema with the first
        rechunk: Copy the result into contiguous memory

    Returns:
        DataFrame with the rows of every segment

    Raises:
        InternalError: If there are no segments
        SchemaMismatchError: If validation is enabled and a segment differs
        PolarsConversionError: If Polars rejects the concatenation
    """
    segment_list = list(segments)
    if not segment_list:
        raise InternalError("No segments to assemble")

    if validate_schema:
        check_segment_schemas(segment_list)

    if len(segment_list) == 1:
        frame = segment_list[0].frame
        return frame.rechunk() if rechunk else frame

    try:
        frame = pl.concat(
            [segment.frame for segment in segment_list],
            how="vertical",
            rechunk=rechunk,
        )
    except pl.exceptions.PolarsError as e:
        raise PolarsConversionError(
            f"Failed to concatenate segments: {e}",
            context={"segment_count": len(segment_list)},
        ) from e

    logger.debug(
        f"Assembled {len(segment_list)} segments into {frame.height} rows",
        extra={"context": {"rechunk": rechunk}},
    )
    return frame
