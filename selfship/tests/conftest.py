"""Shared fixtures: order report lines and frames in source column layout."""

import pytest
import polars as pl

from selfship.pipeline.columns import SOURCE_COLUMNS


REPORT_COLUMNS = list(SOURCE_COLUMNS.values())


@pytest.fixture
def make_line():
    """Factory for one report line (all values as text, like a parsed report)."""
    def _make(
        order="A1",
        product="Widget - Pack of 1",
        qty="1",
        state="Karnataka",
        status="Shipped",
        price="100",
        discount="0",
        shipping="0",
    ):
        return {
            "amazon-order-id": order,
            "product-name": product,
            "quantity": qty,
            "ship-state": state,
            "order-status": status,
            "item-price": price,
            "item-promotion-discount": discount,
            "shipping-price": shipping,
        }
    return _make


@pytest.fixture
def make_report():
    """Factory for a parsed report DataFrame from report lines."""
    def _make(*lines):
        return pl.DataFrame(
            [{col: line.get(col) for col in REPORT_COLUMNS} for line in lines],
            schema={col: pl.Utf8 for col in REPORT_COLUMNS},
        )
    return _make


@pytest.fixture
def scenario_a(make_line, make_report):
    """Two shipped lines of one order to Karnataka: 1x Pack of 2, 2x Pack of 1."""
    return make_report(
        make_line(order="A1", product="Widget - Pack of 2", qty="1"),
        make_line(order="A1", product="Widget - Pack of 1", qty="2"),
    )
