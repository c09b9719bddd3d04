"""Runtime configuration for batch-to-table conversion."""

from pydantic import BaseModel, Field, field_validator


class RuntimeConfig(BaseModel):
    """Configuration for conversion behavior."""

    parallelism: int = Field(
        default=4,
        description="Number of worker threads per pool for batch and column conversion (1 = sequential)",
        ge=1,
    )
    validate_schema: bool = Field(
        default=False,
        description="Compare every converted segment's schema with the first before assembling",
    )
    rechunk: bool = Field(
        default=False,
        description="Copy the assembled table into contiguous memory",
    )

    @field_validator("parallelism")
    @classmethod
    def validate_parallelism(cls, v):
        """Validate parallelism is at least 1."""
        if v < 1:
            raise ValueError("parallelism must be at least 1")
        return v
