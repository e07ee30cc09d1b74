"""Shared fixtures for bodyfile tests."""

import pytest

from bodyfile.cli.output import set_output_format
from bodyfile.core.logging import configure_logging, set_verbose

# fls output for an NTFS directory, $FILE_NAME attribute, no creation time
SAMPLE_LINE = (
    "0|/Users/Administrator ($FILE_NAME)|93552-48-2|d/drwxrwxrwx|0|0|92"
    "|1577092511|1577092511|1577092511|-1"
)

HASHED_LINE = (
    "d41d8cd98f00b204e9800998ecf8427e|/etc/hosts|1234|r/rrw-r--r--|0|0|221"
    "|1700000000|1690000000|1690000001|1680000000"
)

NO_TIME_LINE = "0|/tmp/empty|77|r/rrw-------|1000|1000|0|-1|-1|-1|-1"


@pytest.fixture(autouse=True)
def reset_globals():
    """Restore module-level logging and output settings."""
    configure_logging(log_format="text", quiet=False)
    set_verbose(False)
    set_output_format("jsonl")
    yield
    configure_logging(log_format="text", quiet=False)
    set_verbose(False)
    set_output_format("jsonl")


@pytest.fixture
def sample_line() -> str:
    return SAMPLE_LINE


@pytest.fixture
def hashed_line() -> str:
    return HASHED_LINE
