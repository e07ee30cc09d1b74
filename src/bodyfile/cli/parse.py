"""Parse CLI command: bodyfile lines to JSON records."""

import click

from bodyfile.cli.input import open_input
from bodyfile.cli.output import OutputFormatter
from bodyfile.core.codec import parse_line
from bodyfile.core.errors import EXIT_PARSE_ERROR, LineParseError
from bodyfile.core.lines import iter_lines
from bodyfile.core.logging import warning
from bodyfile.core.metrics import collect_metrics, report_metrics


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
    help="Stop at the first line that fails to parse",
)
@click.option("--limit", "-l", type=int, default=None, help="Limit number of records")
@click.option(
    "--line-numbers",
    "-n",
    is_flag=True,
    default=False,
    help="Include the input line number in each record",
)
@click.pass_context
def parse(
    ctx: click.Context,
    input_path: str,
    strict: bool,
    limit: int | None,
    line_numbers: bool,
) -> None:
    """Parse a bodyfile into JSON records.

    \b
    Examples:
      fls -r -m / image.dd > body.txt
      bodyfile parse body.txt --limit 100
      cat body.txt | bodyfile -f human parse -

    Comment and blank lines are skipped. Lines that fail to parse are
    reported on stderr and skipped unless --strict is given.

    Input is read as UTF-8. Bytes that are not valid UTF-8 are replaced
    with U+FFFD, so names from non-UTF-8 file systems do not survive
    'bodyfile parse | bodyfile format' unchanged.
    """
    formatter: OutputFormatter = ctx.obj["formatter"]

    with open_input(input_path, errors="replace") as input_file, collect_metrics(
        "parse"
    ) as metrics:
        for line_number, line in iter_lines(metrics.count_lines(input_file)):
            metrics.add_processed()

            try:
                record = parse_line(line)
            except LineParseError as e:
                metrics.add_error()
                if strict:
                    formatter.flush()
                    formatter.error({"line_number": line_number, **e.to_structured_error()})
                    report_metrics(metrics)
                    ctx.exit(EXIT_PARSE_ERROR)
                warning(f"Line {line_number}: {e}", line_number=line_number, code=e.code)
                continue

            data = record.model_dump(mode="json")
            if line_numbers:
                data = {"line_number": line_number, **data}
            formatter.output(data)
            metrics.add_output()

            if limit and metrics.records_output >= limit:
                break

    formatter.flush(title=f"Bodyfile records ({metrics.records_output} total)")
    report_metrics(metrics)
