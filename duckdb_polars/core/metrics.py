"""Metrics collection for a single batch-to-table conversion."""

import time
from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class ConversionMetrics:
    """Collects metrics while record batches are converted and assembled."""

    start_time: float = field(default_factory=time.perf_counter)
    end_time: Optional[float] = None

    batches_converted: int = 0
    columns_converted: int = 0
    rows_converted: int = 0
    execution_time: float = 0.0

    batch_row_counts: list[int] = field(default_factory=list)

    def record_segment(self, row_count: int, column_count: int) -> None:
        """Record a converted segment.

        Args:
            row_count: Number of rows in the segment
            column_count: Number of columns in the segment
        """
        self.batches_converted += 1
        self.columns_converted += column_count
        self.rows_converted += row_count
        self.batch_row_counts.append(row_count)

    def finish(self) -> None:
        """Mark the conversion as finished and calculate elapsed time."""
        self.end_time = time.perf_counter()
        self.execution_time = self.end_time - self.start_time

    def to_dict(self) -> dict[str, Any]:
        """Export metrics as dictionary.

        Returns:
            Dictionary containing all metrics
        """
        rows_per_second = (
            self.rows_converted / self.execution_time
            if self.execution_time > 0
            else 0.0
        )

        return {
            "execution_time": self.execution_time,
            "batches_converted": self.batches_converted,
            "columns_converted": self.columns_converted,
            "rows_converted": self.rows_converted,
            "rows_per_second": rows_per_second,
            "batch_row_counts": list(self.batch_row_counts),
        }
