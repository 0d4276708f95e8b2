"""
Tab-Delimited Report Normalizer

Order reports downloaded as .txt are tab-delimited. This converts them to
quoted CSV text so they go through the same parser as native CSV exports.
"""

from ..errors import FormatError


MIN_HEADER_FIELDS = 5           # Fewer header columns is not an order report
QUOTE_TRIGGERS = (",", '"', "\n")


def normalize_tab_report(text: str) -> str:
    """
    Convert tab-delimited report text to CSV text.

    Blank lines are dropped. Every field is trimmed; fields containing a
    comma, a quote or a newline are quoted with internal quotes doubled.

    Args:
        text: Raw report text

    Returns:
        CSV text (header row first, lines joined with newline)

    Raises:
        FormatError: If there are no non-blank lines, or the header has
            fewer than MIN_HEADER_FIELDS tab-separated fields
    """
    lines = [line for line in text.split("\n") if line.strip()]
    if not lines:
        raise FormatError("TXT file appears to be empty")

    if len(lines[0].split("\t")) < MIN_HEADER_FIELDS:
        raise FormatError(
            "TXT file doesn't appear to be a valid order report (too few columns)"
        )

    return "\n".join(
        ",".join(_quote_field(field) for field in line.split("\t"))
        for line in lines
    )


def _quote_field(field: str) -> str:
    field = field.strip()
    if any(ch in field for ch in QUOTE_TRIGGERS):
        return '"' + field.replace('"', '""') + '"'
    return field
