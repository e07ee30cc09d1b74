"""Tests for the bodyfile line codec."""

import random
from concurrent.futures import ThreadPoolExecutor

import pytest

from bodyfile.core.codec import FIELD_NAMES, format_line, format_lines, parse_line
from bodyfile.core.errors import InvalidFieldError, LineParseError, MalformedLineError
from bodyfile.models.line import BodyfileLine

from conftest import HASHED_LINE, NO_TIME_LINE, SAMPLE_LINE

NUMERIC_FIELDS = ["uid", "gid", "size", "atime", "mtime", "ctime", "crtime"]


def _with_field(line: str, field_name: str, value: str) -> str:
    fields = line.split("|")
    fields[FIELD_NAMES.index(field_name)] = value
    return "|".join(fields)


class TestParseLine:
    """Tests for parse_line on well-formed input."""

    def test_sample_fields(self, sample_line):
        record = parse_line(sample_line)
        assert record.md5 == "0"
        assert record.name == "/Users/Administrator ($FILE_NAME)"
        assert record.inode == "93552-48-2"
        assert record.mode_as_string == "d/drwxrwxrwx"
        assert record.uid == 0
        assert record.gid == 0
        assert record.size == 92
        assert record.atime == 1577092511
        assert record.mtime == 1577092511
        assert record.ctime == 1577092511
        assert record.crtime == -1

    def test_hashed_line(self, hashed_line):
        record = parse_line(hashed_line)
        assert record.md5 == "d41d8cd98f00b204e9800998ecf8427e"
        assert record.size == 221
        assert record.crtime == 1680000000

    def test_whitespace_preserved(self):
        line = _with_field(SAMPLE_LINE, "name", "  spaced name\t")
        assert parse_line(line).name == "  spaced name\t"

    def test_empty_text_fields(self):
        record = parse_line("|||" + "|0|0|0|1|1|1|1")
        assert record.md5 == ""
        assert record.name == ""
        assert record.inode == ""
        assert record.mode_as_string == ""

    def test_no_timestamp_is_accepted(self):
        record = parse_line(NO_TIME_LINE)
        assert record.timestamps == {"atime": -1, "mtime": -1, "ctime": -1, "crtime": -1}

    def test_pre_epoch_timestamp(self):
        record = parse_line(_with_field(SAMPLE_LINE, "mtime", "-86400"))
        assert record.mtime == -86400

    def test_unsigned_upper_bound(self):
        record = parse_line(_with_field(SAMPLE_LINE, "size", str(2**64 - 1)))
        assert record.size == 2**64 - 1

    def test_signed_bounds(self):
        line = _with_field(SAMPLE_LINE, "atime", str(2**63 - 1))
        line = _with_field(line, "ctime", str(-(2**63)))
        record = parse_line(line)
        assert record.atime == 2**63 - 1
        assert record.ctime == -(2**63)


class TestMalformedLine:
    """Tests for field count validation."""

    def test_ten_fields(self):
        line = SAMPLE_LINE.rsplit("|", 1)[0]
        with pytest.raises(MalformedLineError) as exc_info:
            parse_line(line)
        assert exc_info.value.found_field_count == 10

    def test_twelve_fields(self):
        with pytest.raises(MalformedLineError) as exc_info:
            parse_line(SAMPLE_LINE + "|extra")
        assert exc_info.value.found_field_count == 12

    def test_empty_line(self):
        with pytest.raises(MalformedLineError) as exc_info:
            parse_line("")
        assert exc_info.value.found_field_count == 1

    def test_pipe_in_name_is_not_disambiguated(self):
        line = _with_field(SAMPLE_LINE, "name", "a|b")
        with pytest.raises(MalformedLineError) as exc_info:
            parse_line(line)
        assert exc_info.value.found_field_count == 12

    def test_count_checked_before_fields(self):
        with pytest.raises(MalformedLineError):
            parse_line("0|x|1|r|abc|abc")

    def test_is_line_parse_error(self):
        with pytest.raises(LineParseError):
            parse_line("not a bodyfile line")


class TestInvalidField:
    """Tests for numeric field validation."""

    @pytest.mark.parametrize("field_name", NUMERIC_FIELDS)
    def test_non_numeric(self, field_name):
        line = _with_field(SAMPLE_LINE, field_name, "abc")
        with pytest.raises(InvalidFieldError) as exc_info:
            parse_line(line)
        assert exc_info.value.field_name == field_name
        assert exc_info.value.raw_value == "abc"
        assert exc_info.value.cause == "invalid digit found in string"

    @pytest.mark.parametrize("field_name", NUMERIC_FIELDS)
    def test_empty(self, field_name):
        line = _with_field(SAMPLE_LINE, field_name, "")
        with pytest.raises(InvalidFieldError) as exc_info:
            parse_line(line)
        assert exc_info.value.field_name == field_name
        assert exc_info.value.cause == "cannot parse integer from empty string"

    @pytest.mark.parametrize("field_name", ["uid", "gid", "size"])
    def test_negative_unsigned(self, field_name):
        line = _with_field(SAMPLE_LINE, field_name, "-1")
        with pytest.raises(InvalidFieldError) as exc_info:
            parse_line(line)
        assert exc_info.value.field_name == field_name

    @pytest.mark.parametrize("raw", ["+5", " 5", "5 ", "1_000", "\u0661\u0662", "0x10", "1.5"])
    def test_non_canonical_digits_rejected(self, raw):
        with pytest.raises(InvalidFieldError):
            parse_line(_with_field(SAMPLE_LINE, "size", raw))

    def test_unsigned_overflow(self):
        with pytest.raises(InvalidFieldError) as exc_info:
            parse_line(_with_field(SAMPLE_LINE, "size", str(2**64)))
        assert exc_info.value.cause == "number too large to fit in target type"

    def test_signed_overflow(self):
        with pytest.raises(InvalidFieldError) as exc_info:
            parse_line(_with_field(SAMPLE_LINE, "atime", str(2**63)))
        assert exc_info.value.cause == "number too large to fit in target type"

    def test_signed_underflow(self):
        with pytest.raises(InvalidFieldError) as exc_info:
            parse_line(_with_field(SAMPLE_LINE, "crtime", str(-(2**63) - 1)))
        assert exc_info.value.cause == "number too small to fit in target type"

    def test_trailing_newline_is_not_stripped(self):
        with pytest.raises(InvalidFieldError) as exc_info:
            parse_line(SAMPLE_LINE + "\n")
        assert exc_info.value.field_name == "crtime"
        assert exc_info.value.raw_value == "-1\n"

    def test_first_bad_field_reported(self):
        line = _with_field(SAMPLE_LINE, "uid", "x")
        line = _with_field(line, "mtime", "y")
        with pytest.raises(InvalidFieldError) as exc_info:
            parse_line(line)
        assert exc_info.value.field_name == "uid"

    def test_cause_is_chained(self):
        with pytest.raises(InvalidFieldError) as exc_info:
            parse_line(_with_field(SAMPLE_LINE, "gid", "wheel"))
        assert isinstance(exc_info.value.__cause__, ValueError)


class TestFormatLine:
    """Tests for format_line and format_lines."""

    def test_default_record(self):
        assert format_line(BodyfileLine()) == "0||0||0|0|0|-1|-1|-1|-1"

    def test_field_order(self):
        record = BodyfileLine(
            md5="0",
            name="/a",
            inode="5",
            mode_as_string="r/r---------",
            uid=1,
            gid=2,
            size=3,
            atime=4,
            mtime=5,
            ctime=6,
            crtime=7,
        )
        assert format_line(record) == "0|/a|5|r/r---------|1|2|3|4|5|6|7"

    def test_no_trailing_newline(self, sample_line):
        assert not format_line(parse_line(sample_line)).endswith("\n")

    def test_text_fields_verbatim(self):
        record = BodyfileLine(name="C:\\dir\\file.txt:Zone.Identifier", mtime=1)
        assert "|C:\\dir\\file.txt:Zone.Identifier|" in format_line(record)

    def test_format_lines(self, sample_line, hashed_line):
        records = [parse_line(sample_line), parse_line(hashed_line)]
        assert list(format_lines(records)) == [sample_line + "\n", hashed_line + "\n"]


class TestRoundTrip:
    """Tests for parse/format round trips."""

    @pytest.mark.parametrize("line", [SAMPLE_LINE, HASHED_LINE, NO_TIME_LINE])
    def test_line_identity(self, line):
        assert format_line(parse_line(line)) == line

    def test_crtime_sentinel_preserved(self, sample_line):
        assert format_line(parse_line(sample_line)).endswith("|-1")

    def test_md5_placeholder(self, sample_line):
        assert format_line(parse_line(sample_line)).startswith("0|")

    def test_record_identity(self):
        record = BodyfileLine(
            md5="0123456789abcdef0123456789abcdef",
            name=" leading and trailing ",
            inode="1-128-4",
            mode_as_string="-/rrwxr-xr-x",
            uid=2**64 - 1,
            gid=0,
            size=42,
            atime=-(2**63),
            mtime=0,
            ctime=2**63 - 1,
            crtime=-1,
        )
        assert parse_line(format_line(record)) == record

    def test_idempotence(self, sample_line):
        once = parse_line(sample_line)
        assert parse_line(format_line(once)) == once

    def test_leading_zeros_are_canonicalized(self):
        line = _with_field(SAMPLE_LINE, "size", "0092")
        assert format_line(parse_line(line)) == SAMPLE_LINE


class TestIndependence:
    """Parsing one line never affects parsing another."""

    def _lines(self) -> list[str]:
        lines = []
        for i in range(200):
            lines.append(_with_field(SAMPLE_LINE, "size", str(i)))
            lines.append(_with_field(HASHED_LINE, "inode", f"{i}-128-1"))
        return lines

    def test_shuffled_order(self):
        lines = self._lines()
        expected = {line: parse_line(line) for line in lines}

        shuffled = lines[:]
        random.Random(1234).shuffle(shuffled)
        for line in shuffled:
            assert parse_line(line) == expected[line]

    def test_concurrent_matches_sequential(self):
        lines = self._lines()
        sequential = [parse_line(line) for line in lines]

        with ThreadPoolExecutor(max_workers=8) as pool:
            concurrent = list(pool.map(parse_line, lines))

        assert concurrent == sequential
        assert [format_line(r) for r in concurrent] == lines
