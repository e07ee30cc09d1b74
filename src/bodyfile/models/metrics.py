"""Run metrics model for the bodyfile CLI."""

from uuid import UUID

from pydantic import BaseModel, Field


class StepMetrics(BaseModel):
    """Observability metrics for a command run.

    Every command emits these metrics to stderr for debugging.
    """

    run_id: UUID = Field(
        ...,
        description="Correlation ID for this run",
    )

    step_name: str = Field(
        ...,
        description="Step identifier (e.g., 'parse', 'validate')",
    )

    duration_ms: int = Field(
        ...,
        ge=0,
        description="Execution time in milliseconds",
    )

    lines_read: int = Field(
        default=0,
        ge=0,
        description="Number of input lines read, including skipped ones",
    )

    records_output: int = Field(
        default=0,
        ge=0,
        description="Number of records or lines emitted",
    )

    skipped: int = Field(
        default=0,
        ge=0,
        description="Comment and blank lines skipped",
    )

    warnings: int = Field(
        default=0,
        ge=0,
        description="Warning count",
    )

    errors: int = Field(
        default=0,
        ge=0,
        description="Error count",
    )

    model_config = {"extra": "forbid"}
