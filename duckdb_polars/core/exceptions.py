"""Exception hierarchy for the duckdb_polars package."""


class DuckDBPolarsError(Exception):
    """Base exception for all duckdb_polars errors."""

    def __init__(self, message: str, context: dict | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class InternalError(DuckDBPolarsError):
    """Raised when an invariant of the conversion itself is violated."""

    pass


class SchemaMismatchError(InternalError):
    """Raised when schema validation finds a segment that differs from the first."""

    pass


class PolarsConversionError(DuckDBPolarsError):
    """Raised when Polars cannot represent or build a column or table."""

    def __init__(self, message: str, context: dict | None = None):
        super().__init__(f"Polars error: {message}", context)


class DuckDBQueryError(DuckDBPolarsError):
    """Raised when DuckDB fails to prepare, execute or return a query."""

    def __init__(self, message: str, context: dict | None = None):
        super().__init__(f"DuckDB error: {message}", context)
