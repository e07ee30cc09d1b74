"""Line source for bodyfile streams.

Turns an iterable of raw text lines (an open file, stdin, a list) into
the newline-free, non-comment lines the codec accepts.
"""

from collections.abc import Iterable, Iterator

COMMENT_PREFIX = "#"


def strip_newline(line: str) -> str:
    """Remove a trailing ``\\n`` or ``\\r\\n`` and nothing else."""
    if line.endswith("\n"):
        line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
    return line


def is_skippable(line: str) -> bool:
    """Check whether a newline-free line is a comment or blank."""
    return line.startswith(COMMENT_PREFIX) or not line.strip()


def iter_lines(stream: Iterable[str]) -> Iterator[tuple[int, str]]:
    """Yield ``(line_number, line)`` for every record line in a stream.

    Line numbers are 1-based positions in the input and count the
    comment and blank lines that are skipped.
    """
    for line_number, raw in enumerate(stream, start=1):
        line = strip_newline(raw)
        if is_skippable(line):
            continue
        yield line_number, line
