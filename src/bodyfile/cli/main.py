"""bodyfile CLI entry point and global options."""

import sys
from typing import Literal

import click

from bodyfile import __version__
from bodyfile.cli.format import format_
from bodyfile.cli.output import OutputFormat, OutputFormatter, set_output_format
from bodyfile.cli.parse import parse
from bodyfile.cli.validate import validate
from bodyfile.core.errors import EXIT_ERROR, BodyfileError, handle_error
from bodyfile.core.logging import configure_logging, set_verbose


@click.group()
@click.option(
    "--format",
    "-f",
    type=click.Choice(["json", "jsonl", "human"]),
    default="jsonl",
    help="Output format (default: jsonl)",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Enable verbose logging to stderr",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    default=False,
    help="Suppress summary output",
)
@click.option(
    "--log-format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Log format for stderr (default: text)",
)
@click.version_option(version=__version__, prog_name="bodyfile")
@click.pass_context
def cli(
    ctx: click.Context,
    format: OutputFormat,
    verbose: bool,
    quiet: bool,
    log_format: Literal["text", "json"],
) -> None:
    """bodyfile: parse, format and validate TSK 3.x bodyfiles.

    A bodyfile has one pipe-delimited line per file:
    MD5|name|inode|mode_as_string|UID|GID|size|atime|mtime|ctime|crtime
    """
    ctx.ensure_object(dict)
    ctx.obj = {"formatter": OutputFormatter(format=format)}

    set_output_format(format)
    set_verbose(verbose)
    configure_logging(log_format=log_format, quiet=quiet)


cli.add_command(parse)
cli.add_command(format_)
cli.add_command(validate)


def main() -> None:
    """Main entry point."""
    try:
        cli()
    except BodyfileError as e:
        handle_error(e)
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_ERROR)


if __name__ == "__main__":
    main()
