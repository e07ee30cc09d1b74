"""Line codec for the TSK 3.x bodyfile format.

Converts between one pipe-delimited line and a BodyfileLine. The format
has no escaping: a line is split positionally on every ``|``, and the
formatter writes text fields exactly as stored.
"""

import re
from collections.abc import Iterable, Iterator

from bodyfile.core.errors import InvalidFieldError, MalformedLineError
from bodyfile.models.line import I64_MAX, I64_MIN, U64_MAX, BodyfileLine

SEPARATOR = "|"

FIELD_NAMES = (
    "md5",
    "name",
    "inode",
    "mode_as_string",
    "uid",
    "gid",
    "size",
    "atime",
    "mtime",
    "ctime",
    "crtime",
)
FIELD_COUNT = len(FIELD_NAMES)

UNSIGNED_FIELDS = ("uid", "gid", "size")
SIGNED_FIELDS = ("atime", "mtime", "ctime", "crtime")

# int() would also accept whitespace, '+', '_' and non-ASCII digits
_UNSIGNED_RE = re.compile(r"[0-9]+")
_SIGNED_RE = re.compile(r"-?[0-9]+")


def _parse_int(raw: str, signed: bool) -> int:
    """Parse a decimal integer, raising ValueError with a short cause."""
    if not raw:
        raise ValueError("cannot parse integer from empty string")

    pattern = _SIGNED_RE if signed else _UNSIGNED_RE
    if not pattern.fullmatch(raw):
        raise ValueError("invalid digit found in string")

    value = int(raw)
    low, high = (I64_MIN, I64_MAX) if signed else (0, U64_MAX)
    if value > high:
        raise ValueError("number too large to fit in target type")
    if value < low:
        raise ValueError("number too small to fit in target type")
    return value


def parse_line(line: str) -> BodyfileLine:
    """Parse one bodyfile line into a BodyfileLine.

    The line must not carry its trailing newline and must not be a
    comment; filtering those is the job of the line source.

    Args:
        line: A single bodyfile line

    Returns:
        BodyfileLine with text fields verbatim and numeric fields typed

    Raises:
        MalformedLineError: The line does not have exactly 11 fields
        InvalidFieldError: A numeric field is not a valid integer
    """
    fields = line.split(SEPARATOR)
    if len(fields) != FIELD_COUNT:
        raise MalformedLineError(found_field_count=len(fields), expected=FIELD_COUNT)

    values: dict[str, str | int] = dict(zip(FIELD_NAMES, fields))

    # Numeric fields are checked in wire order so the first bad one is reported
    for field_name in UNSIGNED_FIELDS + SIGNED_FIELDS:
        raw = values[field_name]
        try:
            values[field_name] = _parse_int(raw, signed=field_name in SIGNED_FIELDS)
        except ValueError as e:
            raise InvalidFieldError(field_name, raw, str(e)) from e

    return BodyfileLine(**values)


def format_line(record: BodyfileLine) -> str:
    """Format a BodyfileLine as a bodyfile line without trailing newline."""
    return SEPARATOR.join(str(getattr(record, name)) for name in FIELD_NAMES)


def format_lines(records: Iterable[BodyfileLine]) -> Iterator[str]:
    """Yield newline-terminated bodyfile lines for writing to a file."""
    for record in records:
        yield format_line(record) + "\n"
