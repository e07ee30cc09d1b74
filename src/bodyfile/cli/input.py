"""Input handling for the bodyfile CLI."""

import io
from collections.abc import Generator
from contextlib import contextmanager
from typing import TextIO

import click


@contextmanager
def open_input(
    path: str, encoding: str = "utf-8", errors: str = "strict"
) -> Generator[TextIO, None, None]:
    """Open a file, or stdin for ``-``, for reading bodyfile lines.

    Lines are split on ``\\n`` only. A lone ``\\r`` is a legal character
    in file names and stays inside its line; ``\\r\\n`` endings are left
    for ``strip_newline``.
    """
    if path == "-":
        stream = io.TextIOWrapper(
            click.get_binary_stream("stdin"), encoding=encoding, errors=errors, newline="\n"
        )
        try:
            yield stream
        finally:
            # Leave stdin itself open
            stream.detach()
    else:
        with open(path, encoding=encoding, errors=errors, newline="\n") as f:
            yield f
