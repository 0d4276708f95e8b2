"""
Unit Tests for the Report Session

Tests upload generations, error scoping and non-fatal rate loading.

Run with: pytest selfship/tests/test_session.py -v
"""

import pytest

from selfship.data import DEFAULT_RATE
from selfship.session import NO_REPORT_MESSAGE, ReportSession


HEADER = (
    "amazon-order-id,product-name,quantity,ship-state,order-status,"
    "item-price,item-promotion-discount,shipping-price\n"
)
OLD_CSV = HEADER + "OLD1,Widget - Pack of 1,1,Karnataka,Shipped,100,0,10\n"
NEW_CSV = HEADER + "NEW1,Widget - Pack of 2,1,Karnataka,Shipped,200,0,20\n"


@pytest.fixture
def session():
    s = ReportSession()
    s.rates = {"KARNATAKA": 55.0}
    s.rates_loaded = True
    return s


# =============================================================================
# UPLOAD TESTS
# =============================================================================

class TestUpload:
    """Tests for upload handling."""

    def test_upload_installs_report(self, session):
        assert session.upload("orders.csv", OLD_CSV) is True
        assert session.rows_loaded == 1
        assert session.report.source_name == "orders.csv"

    def test_stale_upload_discarded(self, session):
        old_token = session.begin_upload()
        new_token = session.begin_upload()

        assert session.complete_upload(new_token, "new.csv", NEW_CSV) is True
        assert session.complete_upload(old_token, "old.csv", OLD_CSV) is False

        assert session.report.source_name == "new.csv"
        assert session.report.rows["amazon-order-id"].to_list() == ["NEW1"]

    def test_only_latest_token_is_current(self, session):
        first = session.begin_upload()
        assert session.is_current(first)
        second = session.begin_upload()
        assert not session.is_current(first)
        assert session.is_current(second)

    def test_failed_upload_keeps_previous_state(self, session):
        session.upload("orders.csv", OLD_CSV)
        result = session.process()

        assert session.upload("orders.pdf", NEW_CSV) is False
        assert session.error == "Please upload a TXT or CSV file"
        assert session.report.source_name == "orders.csv"
        assert session.result is result

    def test_new_upload_clears_result(self, session):
        session.upload("orders.csv", OLD_CSV)
        session.process()
        session.upload("orders.csv", NEW_CSV)
        assert session.result is None
        assert session.error == ""


# =============================================================================
# PROCESS TESTS
# =============================================================================

class TestProcess:
    """Tests for processing runs."""

    def test_process_without_report(self, session):
        assert session.process() is None
        assert session.error == NO_REPORT_MESSAGE

    def test_process_builds_result(self, session):
        session.upload("orders.csv", OLD_CSV)
        result = session.process()
        assert result is session.result
        assert result.orders["shipping_cost"].to_list() == [55.0]
        assert result.total_shipping_revenue == pytest.approx(10.0)

    def test_failed_run_keeps_previous_result(self, session):
        session.upload("orders.csv", OLD_CSV)
        previous = session.process()

        session.sort_by = "bogus"
        assert session.process() is None
        assert session.error.startswith("Processing error")
        assert session.result is previous

    def test_rerun_rebuilds_result(self, session):
        session.upload("orders.csv", OLD_CSV)
        first = session.process()
        second = session.process()
        assert first is not second
        assert first.orders.equals(second.orders)


# =============================================================================
# RATE TESTS
# =============================================================================

class TestRates:
    """Rate card problems never block processing."""

    def test_missing_rate_file_falls_back_to_default(self, tmp_path):
        session = ReportSession()
        assert session.load_rates(tmp_path / "missing.csv") == {}
        assert session.rates_loaded is True
        assert session.warning

        session.upload("orders.csv", OLD_CSV)
        order = session.process().orders.row(0, named=True)
        assert order["rate_per_kg"] == pytest.approx(DEFAULT_RATE)
        assert order["rate_was_defaulted"] is True

    def test_process_loads_bundled_rates_when_none_loaded(self):
        session = ReportSession()
        session.upload("orders.csv", OLD_CSV)

        order = session.process().orders.row(0, named=True)

        assert session.rates_loaded is True
        assert session.rates["KARNATAKA"] == pytest.approx(45.0)
        assert order["rate_per_kg"] == pytest.approx(45.0)
        assert order["rate_was_defaulted"] is False

    def test_explicit_rates_not_reloaded(self, session):
        session.upload("orders.csv", OLD_CSV)
        session.process()
        assert session.rates == {"KARNATAKA": 55.0}

    def test_rate_file_without_expected_columns(self, tmp_path):
        path = tmp_path / "rates.csv"
        path.write_text("Region,Price\nGoa,40\n")
        session = ReportSession()
        assert session.load_rates(path) == {}
        assert session.warning

    def test_successful_load_clears_warning(self, tmp_path):
        path = tmp_path / "rates.csv"
        path.write_text("State,Rate_per_kg\nGoa,40\n")
        session = ReportSession()
        session.warning = "stale"
        assert session.load_rates(path) == {"GOA": 40.0}
        assert session.warning == ""
