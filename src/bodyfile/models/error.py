"""Structured error model for bodyfile."""

from typing import Any

from pydantic import BaseModel, Field


class StructuredError(BaseModel):
    """Structured error response format.

    Parse errors and validation warnings share this schema so callers
    can handle both programmatically and show actionable remediation.
    """

    code: str = Field(
        ...,
        pattern=r"^[A-Z][A-Z0-9_]*$",
        description="Error code (e.g., MALFORMED_LINE)",
        examples=[
            "MALFORMED_LINE",
            "INVALID_FIELD",
            "MISSING_TIMESTAMP",
            "INVALID_MD5",
            "SEPARATOR_IN_FIELD",
        ],
    )

    message: str = Field(
        ...,
        description="Human-readable error message",
    )

    remediation: str = Field(
        ...,
        description="Suggested fix or next step",
    )

    retryable: bool = Field(
        default=False,
        description="Whether retry may succeed",
    )

    context: dict[str, Any] | None = Field(
        default=None,
        description="Additional context (field_name, raw_value, etc.)",
    )

    model_config = {"extra": "forbid"}


class ErrorCode:
    """Standard error codes for bodyfile."""

    # Syntax errors raised by the line codec
    PARSE_ERROR = "PARSE_ERROR"
    MALFORMED_LINE = "MALFORMED_LINE"
    INVALID_FIELD = "INVALID_FIELD"

    # Semantic checks on a parsed record
    MISSING_TIMESTAMP = "MISSING_TIMESTAMP"
    INVALID_MD5 = "INVALID_MD5"
    SEPARATOR_IN_FIELD = "SEPARATOR_IN_FIELD"

    INTERNAL_ERROR = "INTERNAL_ERROR"
