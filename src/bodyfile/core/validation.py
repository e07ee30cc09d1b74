"""Semantic checks for parsed bodyfile records.

The parser only enforces line shape. mactime additionally requires at
least one non-zero timestamp, and some producers write records that
cannot survive a round trip. Those rules live here so that callers can
opt in to them.
"""

import re

from bodyfile.core.errors import RecordValidationError
from bodyfile.models.error import ErrorCode, StructuredError
from bodyfile.models.line import MD5_NOT_COMPUTED, TIME_UNKNOWN, BodyfileLine

MD5_PATTERN = re.compile(r"[0-9a-f]{32}")

TEXT_FIELDS = ("md5", "name", "inode", "mode_as_string")

# Characters that break the one-record-per-line, pipe-delimited layout
_FORBIDDEN_CHARS = ("|", "\r", "\n")


def has_timestamp(record: BodyfileLine) -> bool:
    """Check whether any time field holds a real value (not 0 or -1)."""
    return any(value not in (0, TIME_UNKNOWN) for value in record.timestamps.values())


def check_line(record: BodyfileLine) -> list[StructuredError]:
    """Collect all semantic issues with a record.

    Args:
        record: Parsed or constructed record

    Returns:
        List of issues, empty if the record is clean
    """
    issues: list[StructuredError] = []

    if not has_timestamp(record):
        issues.append(
            StructuredError(
                code=ErrorCode.MISSING_TIMESTAMP,
                message="No time field is set (all are 0 or -1)",
                remediation="mactime requires at least one non-zero time value",
                context={"timestamps": record.timestamps},
            )
        )

    if record.md5 != MD5_NOT_COMPUTED and not MD5_PATTERN.fullmatch(record.md5):
        issues.append(
            StructuredError(
                code=ErrorCode.INVALID_MD5,
                message=f"MD5 {record.md5!r} is neither '0' nor 32 lowercase hex digits",
                remediation="Write '0' when no hash was computed",
                context={"md5": record.md5},
            )
        )

    for field_name in TEXT_FIELDS:
        value = getattr(record, field_name)
        found = [c for c in _FORBIDDEN_CHARS if c in value]
        if found:
            issues.append(
                StructuredError(
                    code=ErrorCode.SEPARATOR_IN_FIELD,
                    message=f"Field '{field_name}' contains {', '.join(map(repr, found))}",
                    remediation="The bodyfile format has no escaping; the formatted line will not parse back",
                    context={"field_name": field_name, "value": value},
                )
            )

    return issues


def validate_line(record: BodyfileLine) -> BodyfileLine:
    """Strictly validate a record.

    Returns:
        The record unchanged

    Raises:
        RecordValidationError: For the first issue found by check_line
    """
    issues = check_line(record)
    if issues:
        raise RecordValidationError(issues[0])
    return record
