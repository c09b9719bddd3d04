"""Unit tests for conversion metrics."""

import time

from duckdb_polars.core.metrics import ConversionMetrics


def test_conversion_metrics_basic():
    """Test basic metrics collection."""
    metrics = ConversionMetrics()

    metrics.record_segment(row_count=100, column_count=3)
    metrics.record_segment(row_count=200, column_count=3)
    metrics.record_segment(row_count=0, column_count=3)

    # Add a small sleep to ensure measurable execution time
    time.sleep(0.01)

    metrics.finish()

    assert metrics.batches_converted == 3
    assert metrics.columns_converted == 9
    assert metrics.rows_converted == 300
    assert metrics.batch_row_counts == [100, 200, 0]
    assert metrics.execution_time > 0


def test_conversion_metrics_to_dict():
    """Test metrics export to dictionary."""
    metrics = ConversionMetrics()

    metrics.record_segment(row_count=50, column_count=2)
    time.sleep(0.01)
    metrics.finish()

    result = metrics.to_dict()

    assert result["batches_converted"] == 1
    assert result["columns_converted"] == 2
    assert result["rows_converted"] == 50
    assert result["batch_row_counts"] == [50]
    assert result["rows_per_second"] > 0


def test_conversion_metrics_unfinished():
    """Test that unfinished metrics report no throughput."""
    metrics = ConversionMetrics()
    metrics.record_segment(row_count=10, column_count=1)

    assert metrics.end_time is None
    assert metrics.to_dict()["rows_per_second"] == 0.0
