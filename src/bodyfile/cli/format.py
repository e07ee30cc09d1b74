"""Format CLI command: JSON records back to bodyfile lines."""

import json
import sys
from collections.abc import Iterator
from typing import TextIO

import click
from pydantic import ValidationError

from bodyfile.cli.input import open_input
from bodyfile.core.codec import format_lines
from bodyfile.core.errors import EXIT_PARSE_ERROR
from bodyfile.core.lines import iter_lines
from bodyfile.core.logging import error, warning
from bodyfile.core.metrics import MetricsCollector, collect_metrics, report_metrics
from bodyfile.core.validation import check_line
from bodyfile.models.error import ErrorCode
from bodyfile.models.line import BodyfileLine


def _load_records(input_file: TextIO, metrics: MetricsCollector) -> Iterator[BodyfileLine]:
    """Yield valid records from a JSONL stream, logging the invalid ones."""
    for line_number, line in iter_lines(metrics.count_lines(input_file)):
        metrics.add_processed()

        try:
            data = json.loads(line)
            if isinstance(data, dict):
                data.pop("line_number", None)
            record = BodyfileLine.model_validate(data)
        except json.JSONDecodeError as e:
            metrics.add_error()
            error(f"Line {line_number}: invalid JSON: {e}", line_number=line_number)
            continue
        except ValidationError as e:
            metrics.add_error()
            error(
                f"Line {line_number}: invalid record: {e.error_count()} error(s)",
                line_number=line_number,
                errors=e.errors(include_url=False),
            )
            continue

        # Written as-is; the output line will not parse back
        for issue in check_line(record):
            if issue.code == ErrorCode.SEPARATOR_IN_FIELD:
                metrics.add_warning()
                warning(
                    f"Line {line_number}: {issue.message}",
                    line_number=line_number,
                    code=issue.code,
                )

        metrics.add_output()
        yield record


@click.command("format")
@click.argument(
    "input_path",
    type=click.Path(exists=True, dir_okay=False, allow_dash=True),
    default="-",
)
@click.pass_context
def format_(ctx: click.Context, input_path: str) -> None:
    """Format JSONL records as bodyfile lines.

    Reads the output of 'bodyfile parse' (one JSON object per line)
    and writes one bodyfile line per record to stdout. Records whose
    text fields contain '|' or a line break are written unchanged and
    reported as warnings.

    \b
    Examples:
      bodyfile parse body.txt | bodyfile format - > body.clean.txt
    """
    with open_input(input_path) as input_file, collect_metrics("format") as metrics:
        sys.stdout.writelines(format_lines(_load_records(input_file, metrics)))
        sys.stdout.flush()

    report_metrics(metrics)
    if metrics.errors:
        ctx.exit(EXIT_PARSE_ERROR)
