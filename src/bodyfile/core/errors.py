"""Structured error handling for bodyfile."""

import sys
from typing import Any, NoReturn

from bodyfile.models.error import ErrorCode, StructuredError

# Exit codes
EXIT_ERROR = 1
EXIT_PARSE_ERROR = 4


class BodyfileError(Exception):
    """Base exception for bodyfile errors.

    Wraps a StructuredError for consistent error handling.
    """

    def __init__(
        self,
        code: str,
        message: str,
        remediation: str,
        retryable: bool = False,
        context: dict[str, Any] | None = None,
    ):
        self.error = StructuredError(
            code=code,
            message=message,
            remediation=remediation,
            retryable=retryable,
            context=context,
        )
        super().__init__(message)

    @property
    def code(self) -> str:
        return self.error.code

    def to_structured(self) -> StructuredError:
        """Convert to StructuredError."""
        return self.error

    def to_structured_error(self) -> dict:
        """Convert to JSON-serializable dict for output."""
        return self.error.model_dump(mode="json", exclude_none=True)


class LineParseError(BodyfileError):
    """A line could not be parsed into a BodyfileLine."""

    def __init__(
        self,
        message: str,
        code: str = ErrorCode.PARSE_ERROR,
        remediation: str = "Check that the line follows the TSK 3.x bodyfile layout",
        context: dict[str, Any] | None = None,
    ):
        super().__init__(
            code=code,
            message=message,
            remediation=remediation,
            retryable=False,
            context=context,
        )


class MalformedLineError(LineParseError):
    """Line does not split into exactly 11 fields."""

    def __init__(self, found_field_count: int, expected: int = 11):
        self.found_field_count = found_field_count
        super().__init__(
            message=f"Expected {expected} fields but found {found_field_count}",
            code=ErrorCode.MALFORMED_LINE,
            remediation=(
                "Each line must have the form "
                "MD5|name|inode|mode_as_string|UID|GID|size|atime|mtime|ctime|crtime; "
                "a '|' inside the name cannot be represented"
            ),
            context={"found_field_count": found_field_count, "expected": expected},
        )


class InvalidFieldError(LineParseError):
    """A numeric field is not a valid integer of the required type."""

    def __init__(self, field_name: str, raw_value: str, cause: str):
        self.field_name = field_name
        self.raw_value = raw_value
        self.cause = cause
        super().__init__(
            message=f"Invalid value {raw_value!r} for field '{field_name}': {cause}",
            code=ErrorCode.INVALID_FIELD,
            remediation=f"Field '{field_name}' must be a decimal integer",
            context={"field_name": field_name, "raw_value": raw_value, "cause": cause},
        )


class RecordValidationError(BodyfileError):
    """A parsed record failed a semantic check."""

    def __init__(self, error: StructuredError):
        super().__init__(
            code=error.code,
            message=error.message,
            remediation=error.remediation,
            retryable=error.retryable,
            context=error.context,
        )


def handle_error(error: BodyfileError | Exception, exit_code: int = 1) -> NoReturn:
    """Handle an error by outputting it and exiting.

    Args:
        error: The error to handle
        exit_code: Exit code to use
    """
    from bodyfile.cli.output import output_error

    if isinstance(error, BodyfileError):
        output_error(error.to_structured())
    else:
        structured = StructuredError(
            code=ErrorCode.INTERNAL_ERROR,
            message=str(error),
            remediation="This is an unexpected error. Please report it.",
            retryable=False,
            context={"type": type(error).__name__},
        )
        output_error(structured)

    sys.exit(exit_code)
