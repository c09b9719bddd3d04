"""DuckDB connector configuration."""

from typing import Any

from pydantic import BaseModel, Field, model_validator

# DuckDB's own default for Arrow record batch readers
DEFAULT_ROWS_PER_BATCH = 1_000_000


class DuckDBConnectorConfig(BaseModel):
    """Configuration for the DuckDB connector."""

    database: str = Field(
        default=":memory:",
        description="Database file path or ':memory:' for in-memory database",
    )
    read_only: bool = Field(default=False, description="Open the database read-only")
    rows_per_batch: int = Field(
        default=DEFAULT_ROWS_PER_BATCH,
        description="Maximum number of rows per Arrow record batch",
        gt=0,
    )
    settings: dict[str, Any] = Field(
        default_factory=dict,
        description="DuckDB configuration options passed to duckdb.connect (e.g. threads)",
    )

    @model_validator(mode="after")
    def validate_fields(self):
        """Validate that in-memory databases are writable."""
        if self.read_only and self.database == ":memory:":
            raise ValueError("read_only requires a database file")
        return self
