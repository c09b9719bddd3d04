"""Command-line interface for duckdb_polars."""
