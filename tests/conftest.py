"""Pytest configuration and shared fixtures."""

import logging
from pathlib import Path

import duckdb
import pyarrow as pa
import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    """Directory holding test data files."""
    return FIXTURES_DIR


@pytest.fixture
def connection():
    """Open an in-memory DuckDB connection for the test."""
    conn = duckdb.connect(":memory:")
    yield conn
    conn.close()


def make_batch(ids: list[int], names: list[str]) -> pa.RecordBatch:
    """Build a record batch with id and name columns."""
    return pa.RecordBatch.from_arrays(
        [pa.array(ids, type=pa.int64()), pa.array(names, type=pa.string())],
        names=["id", "name"],
    )


@pytest.fixture
def simple_batches() -> list[pa.RecordBatch]:
    """Three record batches of one result with id and name columns.

    Rows are numbered 1..6 across the batches, commonly used across
    conversion tests.
    """
    return [
        make_batch([1, 2], ["Alice", "Bob"]),
        make_batch([3], ["Charlie"]),
        make_batch([4, 5, 6], ["Dave", "Eve", "Frank"]),
    ]


@pytest.fixture
def nested_batch() -> pa.RecordBatch:
    """Record batch with a list-of-strings column and a struct column."""
    str_list = pa.array([["a", "b", "c"], ["d", "e", "f"], ["g", "h", "i"]])
    struct = pa.array(
        [
            {"float": 1.0, "mixed": ["1", '"a"']},
            {"float": 2.0, "mixed": ["2", '"b"']},
            {"float": 3.0, "mixed": ["3", '"c"']},
        ]
    )
    return pa.RecordBatch.from_arrays(
        [pa.array([1, 2, 3], type=pa.int32()), str_list, struct],
        names=["int", "str_list", "struct"],
    )


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers installed by configure_logging during a test."""
    yield
    logger = logging.getLogger("duckdb_polars")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
