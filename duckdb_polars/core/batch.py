"""Table segment: one record batch after conversion to Polars."""

from dataclasses import dataclass

import polars as pl


@dataclass(frozen=True)
class TableSegment:
    """One converted record batch, prior to assembly.

    Carries the column names it was built against so that the assembler can
    compare segments without inspecting their data.

    Attributes:
        frame: Polars DataFrame holding the batch's columns
        column_names: Names shared by every batch of the result, by position
        batch_index: Position of the source batch in the result sequence
    """

    frame: pl.DataFrame
    column_names: tuple[str, ...]
    batch_index: int = 0

    @property
    def row_count(self) -> int:
        """Return number of rows."""
        return self.frame.height

    @property
    def column_count(self) -> int:
        """Return number of columns."""
        return self.frame.width

    @property
    def schema(self) -> pl.Schema:
        """Return the Polars schema of the segment."""
        return self.frame.schema
