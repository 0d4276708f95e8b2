"""
Report Session

Holds the current rate card, uploaded report and last result for one user,
and applies the upload/process lifecycle:

    - every upload gets a generation token; a parse that completes with a
      stale token is discarded, so an older upload finishing late can never
      replace a newer one
    - a failed upload or run records an error message and keeps whatever was
      loaded or computed before
    - a successful upload clears the previous result
    - rate card problems are not fatal: orders fall back to the default rate
    - processing before any rate card was loaded loads the bundled one first
"""

from pathlib import Path

import polars as pl

from .calculate_costs import RunResult, process_report
from .data import DEFAULT_RATE, load_rates
from .errors import FormatError, ParseError, ProcessingError
from .pipeline.parse import ParsedReport, read_report


NO_REPORT_MESSAGE = "Please upload the order report file"


class ReportSession:
    """Upload -> process -> export state for a single user."""

    def __init__(
        self,
        default_rate: float = DEFAULT_RATE,
        untagged_as_pack_of_one: bool = True,
        sort_by: str = "total_sales",
    ):
        self.default_rate = default_rate
        self.untagged_as_pack_of_one = untagged_as_pack_of_one
        self.sort_by = sort_by

        self.rates: dict[str, float] = {}
        self.rates_loaded = False
        self.report: ParsedReport | None = None
        self.result: RunResult | None = None
        self.error = ""
        self.warning = ""

        self._generation = 0

    # -------------------------------------------------------------------------
    # RATES
    # -------------------------------------------------------------------------

    def load_rates(self, path: str | Path | None = None) -> dict[str, float]:
        """
        (Re)load the rate card. On failure keep an empty rate card and set a
        warning; every order then uses the default rate.
        """
        try:
            self.rates = load_rates(path)
            self.warning = ""
        except (OSError, pl.exceptions.PolarsError) as e:
            self.rates = {}
            self.warning = (
                f"Could not load shipping rates ({e}); "
                f"using default rate {self.default_rate}/kg for all states"
            )
        self.rates_loaded = True
        return self.rates

    # -------------------------------------------------------------------------
    # UPLOAD
    # -------------------------------------------------------------------------

    def begin_upload(self) -> int:
        """Start an upload and return its generation token."""
        self._generation += 1
        return self._generation

    def is_current(self, token: int) -> bool:
        """True if token belongs to the most recent upload."""
        return token == self._generation

    def complete_upload(self, token: int, source_name: str, text: str) -> bool:
        """
        Parse uploaded text and install it as the current report.

        Args:
            token: Token from begin_upload()
            source_name: File name (extension picks TXT or CSV handling)
            text: File contents

        Returns:
            True if the report was installed. False if the token is stale
            (result discarded, nothing changes) or parsing failed (error set,
            previous report and result kept).
        """
        if not self.is_current(token):
            return False

        try:
            report = read_report(source_name, text)
        except (FormatError, ParseError) as e:
            self.error = str(e)
            return False

        self.report = report
        self.result = None
        self.error = ""
        return True

    def upload(self, source_name: str, text: str) -> bool:
        """Begin and complete an upload in one step."""
        return self.complete_upload(self.begin_upload(), source_name, text)

    @property
    def rows_loaded(self) -> int:
        return 0 if self.report is None else self.report.rows.height

    # -------------------------------------------------------------------------
    # PROCESS
    # -------------------------------------------------------------------------

    def process(self) -> RunResult | None:
        """
        Run both aggregations on the current report. If no rate card was
        loaded yet, the bundled one is loaded first.

        Returns:
            The new RunResult, or None if there is nothing to process or the
            run failed (error set, previous result kept)
        """
        if self.rows_loaded == 0:
            self.error = NO_REPORT_MESSAGE
            return None

        if not self.rates_loaded:
            self.load_rates()

        try:
            result = process_report(
                self.report.rows,
                self.rates,
                default_rate=self.default_rate,
                untagged_as_pack_of_one=self.untagged_as_pack_of_one,
                sort_by=self.sort_by,
            )
        except ProcessingError as e:
            self.error = str(e)
            return None

        self.result = result
        self.error = ""
        return result


__all__ = ["ReportSession", "NO_REPORT_MESSAGE"]
