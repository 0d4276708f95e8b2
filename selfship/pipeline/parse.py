"""
Report Parser

Parses header-row CSV text into a DataFrame of string columns, and detects
the source format from the file extension:

    .txt  - tab-delimited report, normalized to CSV first
    .csv  - parsed directly

Either the whole file parses or an error is raised; no partial rows.
"""

import io
from dataclasses import dataclass
from pathlib import Path

import polars as pl

from ..errors import FormatError, ParseError
from .normalize import normalize_tab_report


SUPPORTED_TYPES = ("txt", "csv")


@dataclass(frozen=True)
class ParsedReport:
    """Parsed rows plus where they came from."""

    rows: pl.DataFrame      # One string column per header field
    source_name: str        # File name as uploaded
    source_type: str        # "TXT" or "CSV"
    converted: bool         # True if normalized from tab-delimited text


def parse_report(text: str) -> pl.DataFrame:
    """
    Parse header-row CSV text into rows.

    Column names are taken verbatim from the first line and every value is
    kept as a string. Empty fields are read as "". Blank lines are skipped.

    Args:
        text: CSV text

    Returns:
        DataFrame with one Utf8 column per header field (empty if the text
        is empty)

    Raises:
        ParseError: On the first structural error (a row with more or fewer
            fields than the header)
    """
    if not text.strip():
        return pl.DataFrame()

    try:
        df = pl.read_csv(
            io.BytesIO(text.encode("utf-8")),
            has_header=True,
            infer_schema=False,
            quote_char='"',
            truncate_ragged_lines=False,
            missing_utf8_is_empty_string=True,
        )
    except pl.exceptions.PolarsError as e:
        raise ParseError(_first_line(e)) from e

    return _check_rows(df)


def read_report(source_name: str, text: str) -> ParsedReport:
    """
    Parse report text, choosing the format from the file extension.

    Args:
        source_name: File name (extension decides the format)
        text: File contents

    Returns:
        ParsedReport

    Raises:
        FormatError: Unsupported extension, or a .txt that fails the
            tab-delimited checks
        ParseError: Structural CSV error
    """
    source_type = Path(source_name).suffix.lower().lstrip(".")
    if source_type not in SUPPORTED_TYPES:
        raise FormatError("Please upload a TXT or CSV file")

    if source_type == "txt":
        try:
            csv_text = normalize_tab_report(text)
        except FormatError as e:
            raise FormatError(f"TXT file processing error: {e}") from e
        try:
            rows = parse_report(csv_text)
        except ParseError as e:
            raise ParseError(f"TXT to CSV conversion error: {e}") from e
    else:
        try:
            rows = parse_report(text)
        except ParseError as e:
            raise ParseError(f"CSV parsing error: {e}") from e

    return ParsedReport(
        rows=rows,
        source_name=source_name,
        source_type=source_type.upper(),
        converted=source_type == "txt",
    )


def read_text(path: str | Path) -> str:
    """Read report text from disk (UTF-8, byte order mark tolerated)."""
    return Path(path).read_text(encoding="utf-8-sig", errors="replace")


def load_report(path: str | Path) -> ParsedReport:
    """Read and parse a report file from disk."""
    path = Path(path)
    return read_report(path.name, read_text(path))


def _check_rows(df: pl.DataFrame) -> pl.DataFrame:
    """
    Drop blank rows and reject short ones.

    Empty fields are read as "", so a null can only be a field missing from
    the end of a row.
    """
    if df.width == 0:
        return df

    checks = df.select([
        pl.all_horizontal(
            pl.all().str.strip_chars().fill_null("") == ""
        ).alias("blank"),
        pl.sum_horizontal(pl.all().is_null().cast(pl.Int64)).alias("missing"),
    ])
    short = (~checks["blank"] & (checks["missing"] > 0)).arg_true()
    if short.len() > 0:
        row = short[0]
        parsed = df.width - checks["missing"][row]
        raise ParseError(
            f"Too few fields: expected {df.width} fields but parsed {parsed} "
            f"(row {row + 1})"
        )

    return df.filter(~checks["blank"])


def _first_line(error: Exception) -> str:
    message = str(error).strip()
    return message.splitlines()[0] if message else type(error).__name__


__all__ = [
    "ParsedReport",
    "parse_report",
    "read_report",
    "read_text",
    "load_report",
    "SUPPORTED_TYPES",
]
