"""Configuration models for duckdb_polars."""

from duckdb_polars.models.runtime_config import RuntimeConfig

__all__ = ["RuntimeConfig"]
