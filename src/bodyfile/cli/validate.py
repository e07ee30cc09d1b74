"""Validate CLI command: report syntax errors and semantic warnings."""

import click

from bodyfile.cli.input import open_input
from bodyfile.cli.output import OutputFormatter
from bodyfile.core.codec import parse_line
from bodyfile.core.errors import EXIT_PARSE_ERROR, LineParseError
from bodyfile.core.lines import iter_lines
from bodyfile.core.metrics import collect_metrics, report_metrics
from bodyfile.core.validation import check_line

ISSUE_COLUMNS = ["line_number", "severity", "code", "message"]


@click.command()
@click.argument(
    "input_path",
    type=click.Path(exists=True, dir_okay=False, allow_dash=True),
    default="-",
)
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Fail on warnings as well as parse errors",
)
@click.pass_context
def validate(ctx: click.Context, input_path: str, strict: bool) -> None:
    """Check a bodyfile for parse errors and mactime problems.

    Emits one object per problem. Parse errors have severity 'error';
    records without any timestamp, malformed MD5 values and fields that
    contain the separator are reported as 'warning'.

    Exits with code 4 if any line fails to parse, or with --strict if
    any warning is found.

    Input is read as UTF-8; invalid bytes are replaced with U+FFFD.
    """
    formatter: OutputFormatter = ctx.obj["formatter"]

    with open_input(input_path, errors="replace") as input_file, collect_metrics(
        "validate"
    ) as metrics:
        for line_number, line in iter_lines(metrics.count_lines(input_file)):
            metrics.add_processed()

            try:
                record = parse_line(line)
            except LineParseError as e:
                metrics.add_error()
                formatter.output(
                    {"line_number": line_number, "severity": "error", **e.to_structured_error()}
                )
                metrics.add_output()
                continue

            issues = check_line(record)
            metrics.add_warning(len(issues))
            for issue in issues:
                formatter.output(
                    {
                        "line_number": line_number,
                        "severity": "warning",
                        **issue.model_dump(mode="json", exclude_none=True),
                    }
                )
                metrics.add_output()

    formatter.flush(title=f"Problems ({metrics.records_output} total)", columns=ISSUE_COLUMNS)
    report_metrics(metrics)

    if metrics.errors or (strict and metrics.warnings):
        ctx.exit(EXIT_PARSE_ERROR)
