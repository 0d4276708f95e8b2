"""
Report Errors

Every failure is scoped to the operation that raised it:

    FormatError     - source text is empty or not a recognisable report
    ParseError      - tabular structure is inconsistent (e.g. ragged rows)
    ProcessingError - unexpected failure while aggregating a parsed report
"""


class ReportError(Exception):
    """Base class for all report errors."""


class FormatError(ReportError):
    """Source file fails the format checks."""


class ParseError(ReportError):
    """Tabular text could not be parsed into rows."""


class ProcessingError(ReportError):
    """Aggregation of a parsed report failed."""


__all__ = [
    "ReportError",
    "FormatError",
    "ParseError",
    "ProcessingError",
]
