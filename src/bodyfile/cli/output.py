"""Output formatting for the bodyfile CLI.

Implements JSON, JSONL, and human-readable output modes.
stdout contains only results.
stderr carries logs, summaries, and metrics.
"""

import json
import sys
from collections.abc import Iterator
from typing import Any, Literal

from pydantic import BaseModel

OutputFormat = Literal["json", "jsonl", "human"]

_output_format: OutputFormat = "jsonl"

# Columns shown for bodyfile records in human format
RECORD_COLUMNS = ["line_number", "name", "inode", "mode_as_string", "size", "mtime"]


def set_output_format(format: OutputFormat) -> None:
    """Set the global output format."""
    global _output_format
    _output_format = format


def _to_data(obj: Any) -> Any:
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json", exclude_none=True)
    return obj


def output_json(data: Any, file: Any = None) -> None:
    """Output data as JSON to stdout.

    Args:
        data: Data to output (dict, list, or Pydantic model)
        file: Output file (defaults to stdout)
    """
    if file is None:
        file = sys.stdout

    if isinstance(data, list):
        data = [_to_data(item) for item in data]
    else:
        data = _to_data(data)

    json.dump(data, file, ensure_ascii=False)
    file.write("\n")
    file.flush()


def output_jsonl(records: Iterator[Any], file: Any = None) -> None:
    """Output records as JSONL (one JSON object per line) to stdout.

    Args:
        records: Iterator of records (dicts or Pydantic models)
        file: Output file (defaults to stdout)
    """
    if file is None:
        file = sys.stdout

    for record in records:
        json.dump(_to_data(record), file, ensure_ascii=False)
        file.write("\n")
        file.flush()


def output_human(data: Any, file: Any = None) -> None:
    """Output a single object as ``key: value`` lines."""
    if file is None:
        file = sys.stdout

    data = _to_data(data)
    if isinstance(data, dict):
        for key, value in data.items():
            file.write(f"{key}: {value}\n")
    else:
        file.write(str(data) + "\n")
    file.flush()


def output_human_table(
    records: list[dict[str, Any]],
    columns: list[str] | None = None,
    title: str | None = None,
    file: Any = None,
    max_width: int = 50,
) -> None:
    """Output records as a human-readable table.

    Args:
        records: List of record dictionaries
        columns: Columns to display (first record's keys if None)
        title: Optional title for the table
        file: Output file (defaults to stdout)
        max_width: Maximum column width
    """
    if file is None:
        file = sys.stdout

    if not records:
        file.write("No records.\n")
        return

    if title:
        file.write(f"\n{title}\n")
        file.write("=" * len(title) + "\n\n")

    if columns is None:
        columns = [col for col in RECORD_COLUMNS if col in records[0]] or list(records[0])

    widths = {col: len(col) for col in columns}
    for record in records[:100]:
        for col in columns:
            widths[col] = min(max_width, max(widths[col], len(str(record.get(col, "")))))

    header = " | ".join(col.ljust(widths[col])[: widths[col]] for col in columns)
    file.write(header + "\n")
    file.write("-" * len(header) + "\n")

    for record in records:
        row = []
        for col in columns:
            value = record.get(col)
            value_str = str(value) if value is not None else ""
            if len(value_str) > widths[col]:
                value_str = value_str[: widths[col] - 3] + "..."
            row.append(value_str.ljust(widths[col]))
        file.write(" | ".join(row) + "\n")

    file.write(f"\nTotal: {len(records)} records\n")
    file.flush()


def output(data: Any, format: OutputFormat | None = None, **kwargs: Any) -> None:
    """Output data in the specified format.

    Args:
        data: Data to output
        format: Output format (uses global if not specified)
        **kwargs: Additional arguments passed to format-specific function
    """
    if format is None:
        format = _output_format

    if format == "human":
        output_human(data, **kwargs)
    else:
        output_json(data, **kwargs)


def output_error(error: Any, file: Any = None) -> None:
    """Output an error to stdout in the current format.

    Errors are output to stdout (not stderr) for programmatic handling.
    """
    output(error, file=file)


class OutputFormatter:
    """Encapsulates output formatting for commands.

    In ``jsonl`` mode records are written as they arrive. ``json`` and
    ``human`` buffer records until ``flush`` so they can be written as a
    single array or table.
    """

    def __init__(self, format: OutputFormat = "jsonl"):
        """Initialize formatter with specified format.

        Args:
            format: Output format (json, jsonl, human)
        """
        self.format = format
        self._buffer: list[dict[str, Any]] = []

    def output(self, data: Any) -> None:
        """Output one record in the configured format.

        Args:
            data: Record to output to stdout
        """
        if self.format == "jsonl":
            output_jsonl(iter([data]))
        else:
            self._buffer.append(_to_data(data))

    def error(self, error: Any) -> None:
        """Output error in the configured format.

        Args:
            error: Error data to output to stdout
        """
        output(error, format="human" if self.format == "human" else "json")

    def flush(self, title: str | None = None, columns: list[str] | None = None) -> None:
        """Write buffered records as a JSON array or table.

        Args:
            title: Optional title for the table (human format)
            columns: Table columns (human format)
        """
        if self.format == "json":
            output_json(self._buffer)
        elif self.format == "human":
            output_human_table(self._buffer, columns=columns, title=title)
        self._buffer = []