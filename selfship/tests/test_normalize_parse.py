"""
Unit Tests for Report Normalization and Parsing

Run with: pytest selfship/tests/test_normalize_parse.py -v
"""

import pytest
import polars as pl

from selfship.errors import FormatError, ParseError
from selfship.pipeline.normalize import normalize_tab_report
from selfship.pipeline.parse import parse_report, read_report, load_report


HEADER = "amazon-order-id\tproduct-name\tquantity\tship-state\torder-status"


# =============================================================================
# NORMALIZER TESTS
# =============================================================================

class TestNormalizeTabReport:
    """Tests for tab-delimited to CSV conversion."""

    def test_tabs_become_commas(self):
        text = f"{HEADER}\nA1\tWidget\t1\tGoa\tShipped\n"
        assert normalize_tab_report(text) == (
            "amazon-order-id,product-name,quantity,ship-state,order-status\n"
            "A1,Widget,1,Goa,Shipped"
        )

    def test_blank_lines_dropped(self):
        text = f"\n{HEADER}\n\n   \nA1\tWidget\t1\tGoa\tShipped\n\n"
        assert len(normalize_tab_report(text).split("\n")) == 2

    def test_fields_trimmed_including_carriage_return(self):
        text = f"{HEADER}\r\n A1 \tWidget\t1\tGoa\tShipped\r\n"
        lines = normalize_tab_report(text).split("\n")
        assert lines[0].endswith("order-status")
        assert lines[1] == "A1,Widget,1,Goa,Shipped"

    def test_field_with_comma_is_quoted(self):
        text = f"{HEADER}\nA1\tWidget, Blue\t1\tGoa\tShipped"
        assert '"Widget, Blue"' in normalize_tab_report(text)

    def test_field_with_quote_is_escaped(self):
        text = f'{HEADER}\nA1\tThe "Best" Widget\t1\tGoa\tShipped'
        assert '"The ""Best"" Widget"' in normalize_tab_report(text)

    def test_empty_text_raises(self):
        with pytest.raises(FormatError, match="empty"):
            normalize_tab_report("")

    def test_whitespace_only_raises(self):
        with pytest.raises(FormatError):
            normalize_tab_report("  \n\t\n\n")

    def test_too_few_header_columns_raises(self):
        with pytest.raises(FormatError, match="too few columns"):
            normalize_tab_report("a\tb\tc\td\n1\t2\t3\t4")

    def test_five_header_columns_accepted(self):
        assert normalize_tab_report("a\tb\tc\td\te") == "a,b,c,d,e"


# =============================================================================
# PARSER TESTS
# =============================================================================

class TestParseReport:
    """Tests for CSV text parsing."""

    def test_columns_verbatim_and_values_as_text(self):
        df = parse_report("amazon-order-id,quantity\nA1,2\nA2,3\n")
        assert df.columns == ["amazon-order-id", "quantity"]
        assert df["quantity"].dtype == pl.Utf8
        assert df["quantity"].to_list() == ["2", "3"]

    def test_blank_lines_skipped(self):
        df = parse_report("a,b\n1,2\n\n3,4\n\n")
        assert df.height == 2
        assert df["a"].to_list() == ["1", "3"]

    def test_quoted_field_with_comma(self):
        df = parse_report('a,b\n"Widget, Blue",2\n')
        assert df["a"][0] == "Widget, Blue"

    def test_quoted_field_with_escaped_quote(self):
        df = parse_report('a,b\n"The ""Best"" Widget",2\n')
        assert df["a"][0] == 'The "Best" Widget'

    def test_too_many_fields_raises(self):
        with pytest.raises(ParseError):
            parse_report("a,b\n1,2,3\n")

    def test_too_few_fields_raises(self):
        with pytest.raises(ParseError, match="Too few fields: expected 3 fields but parsed 2"):
            parse_report("a,b,c\n1,2,3\n4,5\n")

    def test_empty_trailing_field_is_not_short(self):
        df = parse_report("a,b,c\n1,2,\n")
        assert df.row(0) == ("1", "2", "")

    def test_whitespace_only_line_skipped(self):
        df = parse_report("a,b,c\n1,2,3\n   \n4,5,6\n")
        assert df["a"].to_list() == ["1", "4"]

    def test_empty_text_gives_empty_frame(self):
        df = parse_report("")
        assert df.height == 0
        assert df.width == 0

    def test_header_only_gives_no_rows(self):
        df = parse_report("a,b\n")
        assert df.columns == ["a", "b"]
        assert df.height == 0


# =============================================================================
# FORMAT DETECTION TESTS
# =============================================================================

class TestReadReport:
    """Tests for extension-based format detection."""

    TXT = (
        f"{HEADER}\n"
        "A1\tWidget, Blue - Pack of 1\t2\tGoa\tShipped\n"
        "A2\tWidget - Pack of 2\t1\tKerala\tPending\n"
    )
    CSV = (
        "amazon-order-id,product-name,quantity,ship-state,order-status\n"
        'A1,"Widget, Blue - Pack of 1",2,Goa,Shipped\n'
        "A2,Widget - Pack of 2,1,Kerala,Pending\n"
    )

    def test_txt_is_converted(self):
        report = read_report("orders.txt", self.TXT)
        assert report.converted is True
        assert report.source_type == "TXT"
        assert report.rows.height == 2

    def test_csv_is_parsed_directly(self):
        report = read_report("orders.csv", self.CSV)
        assert report.converted is False
        assert report.source_type == "CSV"

    def test_txt_and_csv_give_same_rows(self):
        txt = read_report("orders.txt", self.TXT)
        csv = read_report("orders.csv", self.CSV)
        assert txt.rows.equals(csv.rows)

    def test_extension_is_case_insensitive(self):
        assert read_report("ORDERS.TXT", self.TXT).converted is True

    def test_unsupported_extension_raises(self):
        with pytest.raises(FormatError, match="Please upload a TXT or CSV file"):
            read_report("orders.xlsx", self.CSV)

    def test_bad_txt_raises_with_context(self):
        with pytest.raises(FormatError, match="^TXT file processing error"):
            read_report("orders.txt", "a\tb\n1\t2\n")

    def test_bad_csv_raises_with_context(self):
        with pytest.raises(ParseError, match="^CSV parsing error"):
            read_report("orders.csv", "a,b\n1,2,3\n")

    def test_short_csv_row_raises_with_context(self):
        with pytest.raises(ParseError, match="^CSV parsing error: Too few fields"):
            read_report("orders.csv", "a,b,c\n1,2,3\n4,5\n")

    def test_short_txt_row_raises_with_context(self):
        text = "a\tb\tc\td\te\n1\t2\t3\t4\t5\n1\t2\n"
        with pytest.raises(ParseError, match="^TXT to CSV conversion error: Too few fields"):
            read_report("orders.txt", text)

    def test_load_report_from_disk(self, tmp_path):
        path = tmp_path / "orders.txt"
        path.write_text("\ufeff" + self.TXT, encoding="utf-8")
        report = load_report(path)
        assert report.source_name == "orders.txt"
        assert report.rows.columns[0] == "amazon-order-id"
