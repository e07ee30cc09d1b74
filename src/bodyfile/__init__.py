"""bodyfile: parse and format TSK 3.x bodyfile (mactime) lines."""

__version__ = "0.1.0"

from bodyfile.core.codec import FIELD_NAMES, format_line, format_lines, parse_line  # noqa: E402
from bodyfile.core.errors import (  # noqa: E402
    BodyfileError,
    InvalidFieldError,
    LineParseError,
    MalformedLineError,
    RecordValidationError,
)
from bodyfile.core.lines import iter_lines  # noqa: E402
from bodyfile.core.validation import check_line, has_timestamp, validate_line  # noqa: E402
from bodyfile.models.line import BodyfileLine  # noqa: E402

__all__ = [
    "__version__",
    "BodyfileLine",
    "FIELD_NAMES",
    "parse_line",
    "format_line",
    "format_lines",
    "iter_lines",
    "check_line",
    "has_timestamp",
    "validate_line",
    "BodyfileError",
    "LineParseError",
    "MalformedLineError",
    "InvalidFieldError",
    "RecordValidationError",
]
