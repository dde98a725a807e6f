"""Tests for delimited table encoding."""
import csv
import io

import pytest

from patient_export.core.exceptions import ValidationError
from patient_export.core.export.csv_table import build_table, encode_field, encode_row


def parse_table(data: bytes):
    """Decode a table with a delimiter-aware parser."""
    return list(csv.reader(io.StringIO(data.decode("utf-8"), newline=""), delimiter=";"))


class TestEncodeField:
    def test_plain_value_unchanged(self):
        assert encode_field("hello world") == "hello world"

    def test_empty_value_unchanged(self):
        assert encode_field("") == ""

    def test_commas_are_not_quoted(self):
        assert encode_field("a,b") == "a,b"

    @pytest.mark.parametrize("raw", ["=SUM(A1)", "+1", "-5", "@cmd"])
    def test_formula_prefixes_get_apostrophe(self, raw):
        assert encode_field(raw) == "'" + raw

    def test_formula_guard_example(self):
        assert encode_field("=SUM(A1)") == "'=SUM(A1)"

    def test_semicolon_is_quoted(self):
        assert encode_field("a;b") == '"a;b"'

    def test_double_quote_is_doubled_and_quoted(self):
        assert encode_field('a"b') == '"a""b"'

    def test_newline_is_quoted(self):
        assert encode_field("line1\nline2") == '"line1\nline2"'

    def test_formula_guard_applies_before_quoting(self):
        assert encode_field("=A1;B1") == "\"'=A1;B1\""


class TestEncodeRow:
    def test_joins_with_semicolon(self):
        assert encode_row(["a", "b;c", ""]) == 'a;"b;c";'


class TestBuildTable:
    """Test build_table output shape and ordering."""

    HEADERS = ["id", "note"]

    def test_empty_records_yield_header_only(self):
        data = build_table(self.HEADERS, [], lambda r: [r, r])
        assert data == b"id;note"

    def test_row_count_is_records_plus_header(self):
        records = ["r1", "r2", "r3"]
        data = build_table(self.HEADERS, records, lambda r: [r, f"note {r}"])
        assert len(data.decode("utf-8").split("\n")) == len(records) + 1

    def test_no_trailing_newline(self):
        data = build_table(self.HEADERS, ["r1"], lambda r: [r, ""])
        assert not data.endswith(b"\n")

    def test_preserves_record_order(self):
        data = build_table(self.HEADERS, ["c", "a", "b"], lambda r: [r, ""])
        rows = parse_table(data)
        assert [row[0] for row in rows[1:]] == ["c", "a", "b"]

    def test_round_trip_with_special_characters(self):
        records = [
            ("1", "plain"),
            ("2", "semi;colon"),
            ("3", 'say "hi"'),
            ("4", "multi\nline"),
            ("5", "a, b, c"),
        ]
        data = build_table(self.HEADERS, records, lambda r: list(r))
        rows = parse_table(data)
        assert rows[0] == self.HEADERS
        assert [tuple(row) for row in rows[1:]] == records
        assert all(len(row) == len(self.HEADERS) for row in rows)

    def test_wrong_cell_count_raises(self):
        with pytest.raises(ValidationError):
            build_table(self.HEADERS, ["r1"], lambda r: [r])

    def test_output_is_utf8(self):
        data = build_table(["name"], ["Müller"], lambda r: [r])
        assert data.decode("utf-8") == "name\nMüller"
