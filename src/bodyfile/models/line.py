"""BodyfileLine model: one entry of a TSK 3.x bodyfile.

From the Sleuth Kit wiki: the body file is a pipe ("|") delimited text
file with one line per file (or other event type). fls, ils and
mac-robber write it; mactime reads and sorts it. The 3.x layout is::

    MD5|name|inode|mode_as_string|UID|GID|size|atime|mtime|ctime|crtime

Times are UNIX epoch seconds. mactime only requires that one of the
time values is non-zero and prints the other fields as is.
"""

from typing import Any

from pydantic import BaseModel, Field

U64_MAX = 2**64 - 1
I64_MIN = -(2**63)
I64_MAX = 2**63 - 1

# Placeholder written when no MD5 was computed
MD5_NOT_COMPUTED = "0"

# Sentinel for an unknown timestamp
TIME_UNKNOWN = -1


class BodyfileLine(BaseModel):
    """A single bodyfile record.

    Instances are immutable. Text fields are kept verbatim, including
    surrounding whitespace and display annotations in ``name``. The
    default instance matches an empty fls line: no hash, inode ``0``
    and all timestamps unknown.
    """

    md5: str = Field(
        default=MD5_NOT_COMPUTED,
        description="MD5 of file content, or '0' if not computed",
    )

    name: str = Field(
        default="",
        description="File name as printed by the producing tool",
    )

    inode: str = Field(
        default="0",
        description="Metadata address (e.g., '93552-48-2')",
    )

    mode_as_string: str = Field(
        default="",
        description="Mode string (e.g., 'd/drwxrwxrwx')",
    )

    uid: int = Field(default=0, ge=0, le=U64_MAX, description="Owner user ID")

    gid: int = Field(default=0, ge=0, le=U64_MAX, description="Owner group ID")

    size: int = Field(default=0, ge=0, le=U64_MAX, description="Size in bytes")

    atime: int = Field(
        default=TIME_UNKNOWN,
        ge=I64_MIN,
        le=I64_MAX,
        description="Last access time (epoch seconds, -1 if unknown)",
    )

    mtime: int = Field(
        default=TIME_UNKNOWN,
        ge=I64_MIN,
        le=I64_MAX,
        description="Last modification time (epoch seconds, -1 if unknown)",
    )

    ctime: int = Field(
        default=TIME_UNKNOWN,
        ge=I64_MIN,
        le=I64_MAX,
        description="Metadata change time (epoch seconds, -1 if unknown)",
    )

    crtime: int = Field(
        default=TIME_UNKNOWN,
        ge=I64_MIN,
        le=I64_MAX,
        description="Creation time (epoch seconds, -1 if unknown)",
    )

    model_config = {"extra": "forbid", "frozen": True, "strict": True}

    @classmethod
    def from_line(cls, line: str) -> "BodyfileLine":
        """Parse a single bodyfile line.

        Raises:
            MalformedLineError: Wrong number of fields
            InvalidFieldError: A numeric field is not a valid integer
        """
        from bodyfile.core.codec import parse_line

        return parse_line(line)

    def to_line(self) -> str:
        """Format as a bodyfile line (without trailing newline)."""
        from bodyfile.core.codec import format_line

        return format_line(self)

    def __str__(self) -> str:
        return self.to_line()

    def replace(self, **changes: Any) -> "BodyfileLine":
        """Return a copy with the given fields changed.

        Unlike ``model_copy(update=...)`` the result is validated.
        """
        return type(self).model_validate({**self.model_dump(), **changes})

    @property
    def timestamps(self) -> dict[str, int]:
        """The four time fields by name, in wire order."""
        return {
            "atime": self.atime,
            "mtime": self.mtime,
            "ctime": self.ctime,
            "crtime": self.crtime,
        }

    @property
    def md5_computed(self) -> bool:
        return self.md5 != MD5_NOT_COMPUTED
